import asyncio

from faker import Faker


class SimulatedProcessor:
    """Stands in for a background worker: waits, then produces some text."""

    def __init__(self, delay: float = 2.0, faker: Faker | None = None) -> None:
        self.delay = delay
        self.faker = faker or Faker()

    async def process(self) -> str:
        await asyncio.sleep(self.delay)
        return self.faker.paragraph()

import random
from collections import Counter

from faker import Faker

from core.constants import (
    HOBBIES,
    MAX_AGE,
    MAX_HOBBIES,
    MIN_AGE,
    NATIONALITIES,
    TOP_FILTERS_LIMIT,
)
from core.models.users import FilterItem, User


def generate_mock_data(count: int = 1000, seed: int | None = None) -> list[User]:
    """
    Generate ``count`` fake users with ids 1..count.

    Args:
        count: number of users
        seed: optional seed, for reproducible data

    Returns:
        list[User]: the generated users
    """
    fake = Faker()
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)

    users: list[User] = []
    for i in range(count):
        num_hobbies = rng.randint(0, MAX_HOBBIES)
        users.append(
            User(
                id=i + 1,
                avatar=fake.image_url(width=128, height=128),
                first_name=fake.first_name(),
                last_name=fake.last_name(),
                age=rng.randint(MIN_AGE, MAX_AGE),
                nationality=rng.choice(NATIONALITIES),
                hobbies=rng.sample(HOBBIES, num_hobbies),
            )
        )
    return users


def get_top_hobbies_and_nationalities(
    users: list[User], limit: int = TOP_FILTERS_LIMIT
) -> tuple[list[FilterItem], list[FilterItem]]:
    """Most common hobbies and nationalities, highest count first."""
    hobby_counts: Counter[str] = Counter()
    nationality_counts: Counter[str] = Counter()

    for user in users:
        hobby_counts.update(user.hobbies)
        nationality_counts[user.nationality] += 1

    top_hobbies = [
        FilterItem(hobby=hobby, count=count) for hobby, count in hobby_counts.most_common(limit)
    ]
    top_nationalities = [
        FilterItem(nationality=nationality, count=count)
        for nationality, count in nationality_counts.most_common(limit)
    ]
    return top_hobbies, top_nationalities


def filter_users(
    users: list[User],
    search: str = "",
    nationality: str = "",
    hobbies: str = "",
) -> list[User]:
    """Apply the users endpoint filters; empty values mean "no filter"."""
    filtered = list(users)

    if search:
        needle = search.lower()
        filtered = [
            u
            for u in filtered
            if needle in u.first_name.lower() or needle in u.last_name.lower()
        ]

    if nationality:
        wanted = nationality.lower()
        filtered = [u for u in filtered if u.nationality.lower() == wanted]

    if hobbies:
        wanted_hobbies = {h.strip().lower() for h in hobbies.split(",")}
        filtered = [
            u for u in filtered if any(h.lower() in wanted_hobbies for h in u.hobbies)
        ]

    return filtered


def generate_long_text(paragraphs: int = 32, faker: Faker | None = None) -> str:
    """Lorem paragraphs separated by newlines, used by the streaming endpoint."""
    fake = faker or Faker()
    return "\n".join(fake.paragraphs(nb=paragraphs))

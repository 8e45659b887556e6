"""
Worker queue demo client - terminal front end
"""

import asyncio
import logging
import sys
import time

from client.api import WorkerAPIClient
from client.services import NotificationService, WorkerRequestsService
from core.abstract import App
from core.config import Settings
from core.models.worker import QueuedRequest
from core.types import DemoMode

logger = logging.getLogger(__name__)


class ClientApp(App):
    """Terminal client: drives the same services a UI would."""

    api_client: WorkerAPIClient
    notification_service: NotificationService
    worker_service: WorkerRequestsService

    def __init__(
        self,
        settings: Settings,
        demo: DemoMode = "worker",
        batch_size: int | None = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(settings)
        self.demo = demo
        self.batch_size = batch_size or settings.client_batch_size
        self.timeout = timeout
        self.api_client = WorkerAPIClient(
            self.settings.server_endpoint, self.settings.server_endpoint_ssl
        )
        self.notification_service = NotificationService(self)
        self.worker_service = WorkerRequestsService(self)

    def run(self) -> None:
        self.configure_logging()
        asyncio.run(self._main())

    async def _main(self) -> None:
        try:
            if self.demo == "worker":
                await self.run_worker_demo()
            elif self.demo == "users":
                await self.run_users_demo()
            elif self.demo == "stream":
                await self.run_stream_demo()
        finally:
            await self.api_client.close()

    async def run_worker_demo(self) -> None:
        """Submit a batch, then wait for every request to be completed."""
        service = self.worker_service
        service.start()
        try:
            # give the subscription a moment so early completions are not missed
            deadline = time.monotonic() + 2
            while not service.is_connected and time.monotonic() < deadline:
                await asyncio.sleep(0.05)
            if not service.is_connected:
                logger.warning("Notification channel not connected; results may not arrive")

            if not await service.submit_batch(self.batch_size):
                print(service.error)
                return

            self._print_progress(service)
            deadline = time.monotonic() + self.timeout
            last_completed = -1
            while not service.all_completed and time.monotonic() < deadline:
                await asyncio.sleep(0.1)
                if service.completed_count != last_completed:
                    last_completed = service.completed_count
                    self._print_progress(service)

            for request in service.requests:
                print(_format_request(request))
            self._print_progress(service)
        finally:
            service.stop()

    async def run_users_demo(self) -> None:
        health = await self.api_client.health_check()
        print(f"Server health: {health.status} ({health.timestamp})")

        filters = await self.api_client.get_filters()
        hobbies = ", ".join(f"{f.hobby} ({f.count})" for f in filters.top_hobbies[:5])
        nationalities = ", ".join(
            f"{f.nationality} ({f.count})" for f in filters.top_nationalities[:5]
        )
        print(f"Top hobbies: {hobbies}")
        print(f"Top nationalities: {nationalities}")

        users = await self.api_client.get_users(page=1, limit=10)
        pagination = users.pagination
        print(
            f"Page {pagination.current_page}/{pagination.total_pages} "
            f"({pagination.total_items} users)"
        )
        for user in users.data:
            print(
                f"  #{user.id:<5} {user.first_name} {user.last_name}, {user.age}, "
                f"{user.nationality} - {', '.join(user.hobbies) or 'no hobbies'}"
            )

    async def run_stream_demo(self) -> None:
        def _write(char: str) -> None:
            sys.stdout.write(char)
            sys.stdout.flush()

        text = await self.api_client.stream_text(
            speed=self.settings.stream_default_speed,
            on_character=_write,
            on_error=lambda e: print(f"\nStream failed: {e}"),
        )
        print(f"\n\nReceived {len(text)} characters")

    def _print_progress(self, service: WorkerRequestsService) -> None:
        state = "connected" if service.is_connected else "disconnected"
        print(
            f"[{state}] completed: {service.completed_count} | "
            f"pending: {service.pending_count}"
        )


def _format_request(request: QueuedRequest) -> str:
    result = request.result or ""
    if len(result) > 60:
        result = result[:57] + "..."
    return f"{request.id:<28} {request.status:<10} {result}"

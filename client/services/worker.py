from __future__ import annotations

import asyncio
import logging
import threading

from client.services.base import ServiceBase
from core.constants import (
    CLEAR_BATCH_FAILED_MESSAGE,
    ERROR_RESULT_PREFIX,
    SUBMIT_BATCH_FAILED_MESSAGE,
)
from core.models.worker import QueuedRequest
from core.models.ws import RequestCompletedEvent, RequestErrorEvent

logger = logging.getLogger(__name__)


class WorkerRequestsService(ServiceBase):
    """
    Client-side view of a batch of worker requests.

    Submits batches over HTTP and folds completion/error notifications into
    the locally tracked list by request id. Notifications arrive on the
    notification thread, so the list is guarded by a lock.
    """

    def __init__(self, app) -> None:
        super().__init__(app)
        self._requests: list[QueuedRequest] = []
        # records of a batch still being submitted, and results that arrived
        # before their own submission response
        self._staged: list[QueuedRequest] | None = None
        self._early_results: dict[str, str] = {}
        self.lock = threading.Lock()
        self.is_loading: bool = False
        self.error: str | None = None
        self.mounted: bool = False

    # ——— Lifecycle ———
    def start(self) -> None:
        """Register notification handlers and open the subscription."""
        if self.mounted:
            return
        notifications = self.app.notification_service
        notifications.on_request_completed(self.handle_completed)
        notifications.on_request_error(self.handle_error)
        notifications.on_connection_change(self._log_connection_change)
        notifications.start()
        self.mounted = True

    def stop(self) -> None:
        """Stop listening. Requests already submitted keep running on the server."""
        if not self.mounted:
            return
        notifications = self.app.notification_service
        notifications.stop()
        notifications.clear_callbacks()
        self.mounted = False

    # ——— State ———
    @property
    def requests(self) -> list[QueuedRequest]:
        with self.lock:
            return [r.model_copy() for r in self._requests]

    @property
    def completed_count(self) -> int:
        with self.lock:
            return len([r for r in self._requests if r.status == "completed"])

    @property
    def pending_count(self) -> int:
        with self.lock:
            return len([r for r in self._requests if r.status == "pending"])

    @property
    def is_connected(self) -> bool:
        return self.app.notification_service.is_connected

    @property
    def all_completed(self) -> bool:
        with self.lock:
            return bool(self._requests) and all(r.is_completed for r in self._requests)

    # ——— Actions ———
    async def submit_batch(self, count: int) -> bool:
        """
        Submit ``count`` requests at once.

        Each record is staged as soon as its own response arrives, so a
        notification that beats the rest of the batch is still merged. A
        single failed submission fails the whole batch: the staged records
        are discarded, the local list is left as it was and ``error`` is set.

        Returns:
            bool: True if every submission succeeded
        """
        self.is_loading = True
        self.error = None
        staged: list[QueuedRequest] = []
        with self.lock:
            self._staged = staged
            self._early_results = {}

        try:
            await asyncio.gather(*(self._submit_one(staged) for _ in range(count)))
        except Exception as e:
            logger.error(f"Failed to submit requests: {e}")
            self.error = SUBMIT_BATCH_FAILED_MESSAGE
            self._end_batch()
            return False
        finally:
            self.is_loading = False

        self._end_batch(staged)
        logger.info(f"Submitted {len(staged)} requests")
        return True

    async def _submit_one(self, staged: list[QueuedRequest]) -> None:
        response = await self.app.api_client.submit_request()
        request = QueuedRequest(
            id=response.request_id, status="pending", timestamp=response.timestamp
        )
        with self.lock:
            result = self._early_results.pop(request.id, None)
            if result is not None:
                request = request.model_copy(update={"status": "completed", "result": result})
            staged.append(request)

    def _end_batch(self, staged: list[QueuedRequest] | None = None) -> None:
        with self.lock:
            if staged is not None:
                self._requests = staged
            self._staged = None
            self._early_results = {}

    async def clear_batch(self) -> bool:
        try:
            await self.app.api_client.clear_all_requests()
        except Exception as e:
            logger.error(f"Failed to clear requests: {e}")
            self.error = CLEAR_BATCH_FAILED_MESSAGE
            return False

        with self.lock:
            self._requests = []
        self.error = None
        return True

    # ——— Notification handlers ———
    def handle_completed(self, event: RequestCompletedEvent) -> None:
        self._merge(event.request_id, event.result)

    def handle_error(self, event: RequestErrorEvent) -> None:
        self._merge(event.request_id, f"{ERROR_RESULT_PREFIX}{event.error}")

    def _merge(self, request_id: str, result: str) -> None:
        with self.lock:
            batches = [self._requests]
            if self._staged is not None:
                batches.append(self._staged)
            for records in batches:
                for i, request in enumerate(records):
                    if request.id == request_id:
                        records[i] = request.model_copy(
                            update={"status": "completed", "result": result}
                        )
                        return
            if self._staged is not None:
                # its submission response has not arrived yet
                self._early_results[request_id] = result
        # otherwise not part of this session's batch

    def _log_connection_change(self, connected: bool) -> None:
        logger.info(f"Notification channel {'connected' if connected else 'disconnected'}")

import asyncio
import logging

from icecream import ic

from core.constants import ERROR_RESULT_PREFIX, PROCESSING_FAILED_MESSAGE
from core.models.worker import ClearResponse, QueuedRequest, RequestsResponse
from core.models.ws import RequestCompletedEvent, RequestErrorEvent
from server.services.notifications import NotificationHub
from server.services.processor import SimulatedProcessor
from server.services.request_store import RequestStore

logger = logging.getLogger(__name__)


class WorkerQueue:
    """
    Accepts work submissions and runs each one as an independent task.

    The "queue" is a lookup table: there is no worker pool and no limit on
    in-flight jobs. Results are written back to the store and broadcast
    through the notification hub.
    """

    def __init__(
        self,
        store: RequestStore,
        processor: SimulatedProcessor,
        hub: NotificationHub,
    ) -> None:
        self.store = store
        self.processor = processor
        self.hub = hub
        # Strong references so running jobs are not garbage collected
        self.background_tasks: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        return len(self.background_tasks)

    def submit(self) -> QueuedRequest:
        """
        Create a pending request and start processing it without waiting.

        Must be called from a running event loop.
        """
        request_id = self.store.generate_id()
        request = self.store.create(request_id)

        task = asyncio.create_task(self._run(request_id), name=f"worker:{request_id}")
        self.background_tasks.add(task)
        task.add_done_callback(self.background_tasks.discard)

        logger.info(f"Request {request_id} queued ({self.in_flight} in flight)")
        return request

    async def _run(self, request_id: str) -> None:
        try:
            result = await self.processor.process()
        except asyncio.CancelledError:
            logger.debug(f"Processing cancelled for request {request_id}")
            raise
        except Exception as e:
            logger.error(f"Error processing request {request_id}: {e}")
            await self._fail(request_id, PROCESSING_FAILED_MESSAGE)
            return

        await self._complete(request_id, result)

    async def _complete(self, request_id: str, result: str) -> None:
        request = self.store.update(request_id, "completed", result)
        ic(request_id, request is not None)
        if request is None:
            # cleared while in flight
            return

        logger.info(f"Request {request_id} completed")
        await self.hub.broadcast(RequestCompletedEvent(request_id=request_id, result=result))

    async def _fail(self, request_id: str, message: str) -> None:
        request = self.store.update(request_id, "completed", f"{ERROR_RESULT_PREFIX}{message}")
        ic(request_id, message, request is not None)
        if request is None:
            return

        await self.hub.broadcast(RequestErrorEvent(request_id=request_id, error=message))

    def status(self, request_id: str) -> QueuedRequest:
        return self.store.get(request_id)

    def list_all(self) -> RequestsResponse:
        requests = self.store.list_all()
        return RequestsResponse(
            requests=requests,
            total=len(requests),
            pending=len([r for r in requests if r.status == "pending"]),
            completed=len([r for r in requests if r.status == "completed"]),
        )

    def clear_all(self) -> ClearResponse:
        cleared = len(self.store)
        self.store.clear()
        logger.info(f"Cleared {cleared} requests")
        return ClearResponse()

    async def shutdown(self) -> None:
        """Cancel jobs still running when the server stops."""
        tasks = list(self.background_tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info(f"Cancelled {len(tasks)} in-flight requests")

import logging

from core.clock import now_ms
from core.models.worker import QueuedRequest
from core.types import RequestStatus

logger = logging.getLogger(__name__)


class RequestNotFoundError(LookupError):
    """Raised when a request id is not present in the store."""

    def __init__(self, request_id: str) -> None:
        super().__init__(request_id)
        self.request_id = request_id


class RequestStore:
    """
    In-memory table of queued requests, keyed by id.

    Owns every mutation of request status/result; callers only ever get
    copies. Records keep insertion order, and once a record is completed
    it is never changed again.
    """

    def __init__(self) -> None:
        self._requests: dict[str, QueuedRequest] = {}
        self._counter = 0
        # ids minted after a clear use a millisecond part above this value
        self._min_id_ms = 0
        self._last_id_ms = 0

    def __len__(self) -> int:
        return len(self._requests)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._requests

    def generate_id(self) -> str:
        """
        Mint a new request id of the form ``req_<ms>_<counter>``.

        Returns:
            str: an id that has never been issued by this store
        """
        self._counter += 1
        ms = max(now_ms(), self._min_id_ms)
        self._last_id_ms = max(self._last_id_ms, ms)
        return f"req_{ms}_{self._counter}"

    def create(self, request_id: str) -> QueuedRequest:
        if request_id in self._requests:
            raise ValueError(f"Request {request_id} already exists")

        request = QueuedRequest(id=request_id, status="pending", timestamp=now_ms())
        self._requests[request_id] = request
        return request.model_copy()

    def get(self, request_id: str) -> QueuedRequest:
        request = self._requests.get(request_id)
        if request is None:
            raise RequestNotFoundError(request_id)
        return request.model_copy()

    def update(
        self, request_id: str, status: RequestStatus, result: str | None = None
    ) -> QueuedRequest | None:
        """
        Set the status (and result) of an existing request.

        Args:
            request_id: ID of the request
            status: new status
            result: result text, only kept when ``status`` is "completed"

        Returns:
            The updated record, or None if the id is unknown or the record
            was already completed.
        """
        request = self._requests.get(request_id)
        if request is None:
            logger.debug(f"Ignoring update for unknown request {request_id}")
            return None
        if request.is_completed:
            logger.warning(f"Request {request_id} already completed, update ignored")
            return None

        request.status = status
        request.result = result if status == "completed" else None
        return request.model_copy()

    def list_all(self) -> list[QueuedRequest]:
        return [request.model_copy() for request in self._requests.values()]

    def clear(self) -> None:
        self._requests.clear()
        self._counter = 0
        self._min_id_ms = self._last_id_ms + 1

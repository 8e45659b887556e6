from pydantic import Field

from core.clock import now_ms
from core.constants import CLEAR_MESSAGE, SUBMIT_MESSAGE
from core.models.base import CamelModel
from core.types import RequestStatus


class QueuedRequest(CamelModel):
    id: str
    status: RequestStatus = "pending"
    result: str | None = None
    timestamp: int = Field(default_factory=now_ms)

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"


class SubmitResponse(CamelModel):
    request_id: str
    status: RequestStatus = "pending"
    message: str = SUBMIT_MESSAGE
    timestamp: int = Field(default_factory=now_ms)


class StatusResponse(CamelModel):
    request_id: str
    status: RequestStatus
    result: str | None = None
    timestamp: int


class RequestsResponse(CamelModel):
    requests: list[QueuedRequest] = Field(default_factory=list)
    total: int = 0
    pending: int = 0
    completed: int = 0


class ClearResponse(CamelModel):
    message: str = CLEAR_MESSAGE
    timestamp: int = Field(default_factory=now_ms)


class ErrorResponse(CamelModel):
    error: str
    timestamp: int = Field(default_factory=now_ms)

from enum import IntEnum
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from core.clock import now_ms
from core.models.base import CamelModel


class WebSocketCloseCode(IntEnum):
    """Close codes used on the notification channel"""

    NORMAL = 1000
    GOING_AWAY = 1001
    ERROR = 4002


class RequestCompletedEvent(CamelModel):
    event: Literal["request-completed"] = "request-completed"
    request_id: str
    result: str
    timestamp: int = Field(default_factory=now_ms)


class RequestErrorEvent(CamelModel):
    event: Literal["request-error"] = "request-error"
    request_id: str
    error: str
    timestamp: int = Field(default_factory=now_ms)


WorkerEventType = Annotated[
    RequestCompletedEvent | RequestErrorEvent,
    Field(discriminator="event"),
]
WorkerEvent: TypeAdapter[WorkerEventType] = TypeAdapter(WorkerEventType)

from typing import Literal, TypeAlias

RequestStatus: TypeAlias = Literal["pending", "processing", "completed"]
TimestampMs: TypeAlias = int
WorkerEventName: TypeAlias = Literal["request-completed", "request-error"]
DemoMode: TypeAlias = Literal["worker", "users", "stream"]

__all__ = [
    "DemoMode",
    "RequestStatus",
    "TimestampMs",
    "WorkerEventName",
]

from .notifications import NotificationHub
from .processor import SimulatedProcessor
from .request_store import RequestNotFoundError, RequestStore
from .worker_queue import WorkerQueue

__all__ = [
    "NotificationHub",
    "RequestNotFoundError",
    "RequestStore",
    "SimulatedProcessor",
    "WorkerQueue",
]

from .notifications import NotificationService
from .worker import WorkerRequestsService

__all__ = ["NotificationService", "WorkerRequestsService"]

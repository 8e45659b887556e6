from typing import Annotated

from fastapi import Depends, Request, WebSocket

from core.config import Settings
from core.models.users import User
from server.services.notifications import NotificationHub
from server.services.worker_queue import WorkerQueue


def get_worker_queue(request: Request) -> WorkerQueue:
    return request.app.state.worker_queue


def get_notification_hub(websocket: WebSocket) -> NotificationHub:
    return websocket.app.state.notification_hub


def get_users(request: Request) -> list[User]:
    return request.app.state.users


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


WorkerQueueDep = Annotated[WorkerQueue, Depends(get_worker_queue)]
NotificationHubDep = Annotated[NotificationHub, Depends(get_notification_hub)]
UsersDep = Annotated[list[User], Depends(get_users)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]

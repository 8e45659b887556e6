"""Test doubles shared across the suite."""

import json

from client.services.notifications import NotificationService
from core.config import Settings

FAST_DELAY = 0.05
SLOW_DELAY = 5.0


def make_settings(**overrides) -> Settings:
    values = {
        "worker_processing_delay": FAST_DELAY,
        "mock_users_count": 50,
        "mock_users_seed": 1234,
        "stream_paragraphs": 1,
        "stream_default_speed": 1,
        "server_endpoint": "testserver",
        "server_endpoint_ssl": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class InProcessNotifications(NotificationService):
    """
    NotificationService fed directly by the server's hub instead of a
    network socket. Registered as a hub subscriber via ``send_json``.
    """

    def start(self) -> None:
        self.running = True
        self._set_connected(True)

    def stop(self) -> None:
        self.running = False
        self._set_connected(False)

    async def send_json(self, payload: dict) -> None:
        self.dispatch(json.dumps(payload))


class RecordingSubscriber:
    """Hub subscriber that keeps every payload it receives."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.messages: list[dict] = []
        self.client = None

    async def send_json(self, payload: dict) -> None:
        if self.fail:
            raise RuntimeError("connection lost")
        self.messages.append(payload)

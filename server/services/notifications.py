import logging

from fastapi import WebSocket
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class NotificationHub:
    """Broadcast channel: every event goes to every connected subscriber."""

    def __init__(self) -> None:
        self.connections: set[WebSocket] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self.connections)

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self.connections.add(ws)
        logger.info(f"Client connected: {_client_label(ws)} ({len(self.connections)} total)")

    def disconnect(self, ws: WebSocket) -> None:
        if ws in self.connections:
            self.connections.discard(ws)
            logger.info(
                f"Client disconnected: {_client_label(ws)} ({len(self.connections)} remaining)"
            )

    async def broadcast(self, event: BaseModel) -> int:
        """
        Send an event to all current subscribers.

        Subscribers that fail to receive it are dropped. There is no replay
        for subscribers that connect later.

        Returns:
            int: number of subscribers the event was delivered to
        """
        payload = event.model_dump(by_alias=True)
        delivered = 0
        for ws in list(self.connections):
            try:
                await ws.send_json(payload)
                delivered += 1
            except Exception as e:
                logger.error(f"Error notifying {_client_label(ws)}: {e}")
                self.connections.discard(ws)
        return delivered


def _client_label(ws: WebSocket) -> str:
    client = getattr(ws, "client", None)
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"

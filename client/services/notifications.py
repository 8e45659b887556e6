import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError
from websockets import ClientConnection, ConnectionClosed, connect
from websockets.exceptions import InvalidHandshake

from client.services.base import ServiceBase
from core.models.ws import RequestCompletedEvent, RequestErrorEvent, WorkerEvent

logger = logging.getLogger(__name__)


class NotificationService(ServiceBase):
    """
    Subscribe to the server's worker notification channel and dispatch
    incoming events to registered callbacks.

    Runs its own event loop on a daemon thread, so callbacks are invoked
    from that thread.
    """

    max_retries = 3
    retry_delay = 1  # seconds

    def __init__(self, app) -> None:
        super().__init__(app)
        self.websocket: ClientConnection | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._listener: asyncio.Task | None = None
        self._thread: threading.Thread | None = None
        self.running: bool = False
        self.connected: bool = False
        self._completed_callbacks: list[Callable[[RequestCompletedEvent], Any]] = []
        self._error_callbacks: list[Callable[[RequestErrorEvent], Any]] = []
        self._connection_callbacks: list[Callable[[bool], Any]] = []

    @property
    def uri(self) -> str:
        protocol = "wss" if self.settings.server_endpoint_ssl else "ws"
        return f"{protocol}://{self.settings.server_endpoint}/ws/worker"

    @property
    def is_connected(self) -> bool:
        return self.connected

    def on_request_completed(self, callback: Callable[[RequestCompletedEvent], Any]) -> None:
        self._completed_callbacks.append(callback)

    def on_request_error(self, callback: Callable[[RequestErrorEvent], Any]) -> None:
        self._error_callbacks.append(callback)

    def on_connection_change(self, callback: Callable[[bool], Any]) -> None:
        self._connection_callbacks.append(callback)

    def clear_callbacks(self) -> None:
        self._completed_callbacks.clear()
        self._error_callbacks.clear()
        self._connection_callbacks.clear()

    def start(self) -> None:
        """Open the subscription on a background thread."""
        if self.running:
            return

        self.running = True
        self._loop = asyncio.new_event_loop()
        # created before the thread starts so stop() always has a task to cancel
        self._listener = self._loop.create_task(self._handler())
        self._thread = threading.Thread(
            target=self._listen, name="worker-notifications", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Close the subscription. Work already queued on the server keeps running."""
        if not self.running:
            return
        self.running = False

        if self._thread and self._thread.is_alive():
            if self._loop and self._listener:
                self._loop.call_soon_threadsafe(self._listener.cancel)
            self._thread.join(timeout=1)

        self._set_connected(False)

    def _listen(self) -> None:
        """Thread body: drive the listener task to completion, then close the loop."""
        loop = self._loop
        if not loop or not self._listener:
            return

        asyncio.set_event_loop(loop)
        try:
            with contextlib.suppress(asyncio.CancelledError):
                loop.run_until_complete(self._listener)
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()

    async def _handler(self) -> None:
        """Connect, then dispatch events until the connection or the service stops."""
        for attempt in range(self.max_retries):
            if not self.running:
                break

            try:
                async with connect(self.uri) as ws:
                    self.websocket = ws
                    self._set_connected(True)
                    logger.info(f"WebSocket connected: {self.uri}")
                    async for message in ws:
                        self.dispatch(message)
                return

            except (ConnectionClosed, InvalidHandshake, OSError) as e:
                logger.error(f"WebSocket connection error (attempt {attempt + 1}): {e}")
                self._set_connected(False)
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(self.retry_delay)
            finally:
                self.websocket = None
                if self.connected:
                    logger.info("WebSocket disconnected")
                self._set_connected(False)

        if self.running:
            logger.error(f"Giving up on {self.uri} after {self.max_retries} attempts")

    def dispatch(self, message: str | bytes) -> None:
        """Decode one channel message and hand it to the matching callbacks."""
        try:
            event = WorkerEvent.validate_json(message)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed notification: {e}")
            return

        callbacks: list[Callable[[Any], Any]]
        if isinstance(event, RequestCompletedEvent):
            callbacks = self._completed_callbacks
        else:
            callbacks = self._error_callbacks

        for cb in callbacks:
            try:
                cb(event)
            except Exception as e:
                logger.error(f"Error in {event.event} callback: {e}")

    def _set_connected(self, connected: bool) -> None:
        if connected == self.connected:
            return
        self.connected = connected
        for cb in self._connection_callbacks:
            try:
                cb(connected)
            except Exception as e:
                logger.error(f"Error in connection callback: {e}")

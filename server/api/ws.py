import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from server.api.dependencies import NotificationHubDep

logger = logging.getLogger(__name__)
router = APIRouter(tags=["WebSockets"])


@router.websocket("/worker")
async def worker_notifications_ws(websocket: WebSocket, hub: NotificationHubDep) -> None:
    """
    Public broadcast channel for worker results. Sends JSON events:
      {"event": "request-completed", "requestId", "result", "timestamp"}
      {"event": "request-error", "requestId", "error", "timestamp"}
    Inbound messages are ignored.
    """
    await hub.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"Error in worker notifications websocket: {e!s}")
    finally:
        hub.disconnect(websocket)

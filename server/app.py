import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from icecream import ic

from core.abstract import App
from core.config import Settings
from core.constants import INTERNAL_ERROR_MESSAGE
from server.services.notifications import NotificationHub
from server.services.processor import SimulatedProcessor
from server.services.request_store import RequestStore
from server.services.worker_queue import WorkerQueue
from server.utils.mock_data import generate_mock_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ANN201
    logger.info(f"Serving {len(app.state.users)} mock users")

    yield

    await app.state.worker_queue.shutdown()


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc!s}")
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def create_app(settings: Settings) -> FastAPI:
    """
    Build the FastAPI application and the services it owns.

    The request store, notification hub and worker queue are created here
    and reached by the routers through ``app.state``.
    """
    if settings.server_debug:
        ic.enable()
    else:
        ic.disable()

    app = FastAPI(
        title="Worker Queue Demo Server",
        description="Mock users API, text streaming and a simulated worker queue",
        version="1.0.0",
        docs_url="/docs" if settings.server_debug else None,
        redoc_url="/redoc" if settings.server_debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.notification_hub = NotificationHub()
    app.state.worker_queue = WorkerQueue(
        store=RequestStore(),
        processor=SimulatedProcessor(delay=settings.worker_processing_delay),
        hub=app.state.notification_hub,
    )
    app.state.users = generate_mock_data(settings.mock_users_count, seed=settings.mock_users_seed)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, internal_error_handler)

    from .api.streaming import router as streaming_router
    from .api.users import router as users_router
    from .api.worker import router as worker_router
    from .api.ws import router as ws_router

    app.include_router(users_router, prefix="/api")
    app.include_router(streaming_router, prefix="/api")
    app.include_router(worker_router, prefix="/api/worker")
    app.include_router(ws_router, prefix="/ws")

    return app


class ServerApp(App):
    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.app = create_app(settings)

    def run(self) -> None:
        self.configure_logging()
        port = self.settings.server_port or 5001
        logger.info(f"Server running on port {port}")
        logger.info(f"Health check: http://localhost:{port}/api/health")
        logger.info(f"Worker notifications: ws://localhost:{port}/ws/worker")
        uvicorn.run(
            self.app,
            host=self.settings.server_bind,
            port=port,
            log_level=self.settings.log_level.lower(),
        )

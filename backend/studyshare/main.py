"""
StudyShare FastAPI Application Entry Point.

Run with: uvicorn studyshare.main:app --reload
"""

import asyncio
import contextlib
import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from studyshare.api.errors import register_exception_handlers
from studyshare.api.routes import auth, categories, notes, ratings
from studyshare.config import Settings, get_settings
from studyshare.db import MemStorage
from studyshare.services import FileRepository, SessionStore
from studyshare.services.sessions import prune_sessions_periodically

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("studyshare.access")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown."""
    # Startup
    settings: Settings = app.state.settings
    sweeper = asyncio.create_task(
        prune_sessions_periodically(app.state.sessions, settings.session_check_period_seconds)
    )
    logger.info("%s started (uploads in %s)", settings.app_name, app.state.files.root)
    yield
    # Shutdown
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper


async def log_api_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Log `METHOD path status in Nms` for every /api request."""
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        duration_ms = (time.perf_counter() - start) * 1000
        access_logger.info(
            "%s %s %d in %dms", request.method, request.url.path, response.status_code, duration_ms
        )
    return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its stores.

    The entity store, file repository and session store are created here,
    once, and reached by handlers through app.state.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="College note-sharing API",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = MemStorage()
    app.state.files = FileRepository(settings.uploads_dir)
    app.state.sessions = SessionStore(max_age=timedelta(seconds=settings.session_max_age_seconds))

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_api_requests)

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/api")
    app.include_router(categories.router, prefix="/api")
    app.include_router(notes.router, prefix="/api")
    app.include_router(ratings.router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()

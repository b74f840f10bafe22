"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request

from totem import __version__
from totem.api.routes import health, performance
from totem.core.config import AppSettings
from totem.core.logging import get_logger, setup_logging
from totem.core.protocols import IStore
from totem.persistence import create_persistence

log = get_logger("totem.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings: AppSettings = app.state.settings
    setup_logging(settings.log_level)
    if getattr(app.state, "store", None) is None:
        app.state.store = create_persistence(settings)
    log.info("app_started", environment=settings.environment, backend=settings.persistence_backend)
    yield
    log.info("app_stopped")


def create_app(settings: AppSettings | None = None, store: IStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    A pre-built ``store`` skips backend wiring in the lifespan (tests).
    """
    app = FastAPI(
        title="Totem Restaurant Operations",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings or AppSettings()
    app.state.store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        log.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    app.include_router(health.router)
    app.include_router(performance.router, prefix="/api")
    return app

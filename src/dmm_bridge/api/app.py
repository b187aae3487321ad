"""
dmm_bridge.api.app

FastAPI app factory for the bridge.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create the dispatcher on startup and tear it down (closing any open browser
  session) on shutdown.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from dmm_bridge import __version__
from dmm_bridge.api.routers.health import router as health_router
from dmm_bridge.api.routers.webhook import router as webhook_router
from dmm_bridge.dispatch.factory import build_dispatcher
from dmm_bridge.dispatch.models import Dispatcher
from dmm_bridge.observability.logging import configure_logging, get_logger
from dmm_bridge.observability.middleware import RequestContextMiddleware
from dmm_bridge.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, dispatcher: Dispatcher | None = None) -> FastAPI:
    # Idempotent; safe when tests build several apps in one process.
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # One dispatcher per lifespan; it is closed and dropped again on shutdown.
        app.state.dispatcher = dispatcher or build_dispatcher(settings)
        log.info(
            "startup",
            dmm_url=settings.base_url,
            dispatch_mode=app.state.dispatcher.mode,
            webhook_auth=bool(settings.webhook_auth_header),
        )
        try:
            yield
        finally:
            # Uvicorn turns SIGINT/SIGTERM into this shutdown path, so the
            # browser is closed before the process exits.
            await app.state.dispatcher.close()
            app.state.dispatcher = None
            log.info("shutdown")

    app = FastAPI(
        title="Overseerr to Debrid Media Manager bridge",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Until the lifespan runs, deps answer 503 instead of raising AttributeError.
    app.state.dispatcher = None

    # Outermost, so request_id is bound before any router logs.
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(webhook_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Tests inject a fake dispatcher through `create_app(dispatcher=...)`; production
# builds one from settings (see `dmm_bridge.dispatch.factory`).

"""
dmm_bridge.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the dispatcher.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from dmm_bridge.dispatch.models import Dispatcher
from dmm_bridge.services.relay_service import RelayService
from dmm_bridge.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are bound to the app in `create_app`, so tests can pass their own.
    return request.app.state.settings  # type: ignore[attr-defined]


def dispatcher_from_app(request: Request) -> Dispatcher:
    # The dispatcher is created during app lifespan startup (see `dmm_bridge.api.app`).
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Dispatcher not ready")
    return dispatcher


def relay_service(dispatcher: Dispatcher = Depends(dispatcher_from_app)) -> RelayService:
    return RelayService(dispatcher=dispatcher)

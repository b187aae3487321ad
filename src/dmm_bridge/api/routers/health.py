"""
dmm_bridge.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness check (`/healthz`).
- Provide readiness check (`/readyz`): the dispatcher has been wired at startup.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dmm_bridge.api.deps import dispatcher_from_app
from dmm_bridge.dispatch.models import Dispatcher

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(dispatcher: Dispatcher = Depends(dispatcher_from_app)) -> dict[str, str]:
    # The browser itself launches lazily, so readiness does not imply a live Chromium.
    return {"status": "ready", "dispatch_mode": dispatcher.mode}

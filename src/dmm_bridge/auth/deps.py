"""
dmm_bridge.auth.deps

FastAPI dependency for webhook authentication.

Responsibilities:
- Compare the request's `Authorization` header with WEBHOOK_AUTH_HEADER.
- Stay a no-op when no shared secret is configured.
"""

from __future__ import annotations

import hmac

from fastapi import Depends, Header, HTTPException
from starlette.status import HTTP_401_UNAUTHORIZED

from dmm_bridge.api.deps import settings_dep
from dmm_bridge.observability.logging import get_logger
from dmm_bridge.settings import Settings

log = get_logger(__name__)


def verify_webhook_auth(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(settings_dep),
) -> None:
    expected = settings.webhook_auth_header
    if not expected:
        return
    # Overseerr sends the configured header value as-is (no "Bearer" scheme).
    if authorization is None or not hmac.compare_digest(
        authorization.encode(), expected.encode()
    ):
        log.warning("webhook_auth_rejected", header_present=authorization is not None)
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid webhook credentials")


# --- Module Notes -----------------------------------------------------------
# A single shared secret per deployment; there is no per-user identity here.

"""
dmm_bridge.api.routers.webhook

Inbound webhook endpoint for the request manager (Overseerr/Jellyseerr).

Responsibilities:
- Validate the notification payload shape.
- Delegate to RelayService and map its outcome onto the response contract:
  200 {success}, 400/500 {error, details}.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from dmm_bridge.api.deps import relay_service
from dmm_bridge.auth.deps import verify_webhook_auth
from dmm_bridge.observability.logging import get_logger
from dmm_bridge.services.relay_service import InvalidPayloadError, RelayService

log = get_logger(__name__)

router = APIRouter(tags=["webhook"])


class WebhookPayload(BaseModel):
    """
    Overseerr's JSON template is user-editable, so only "is a JSON object" is
    enforced here. Field shapes matter for approvals only and are checked by
    RelayService; anything else must still be acknowledged with a 200.
    """

    model_config = ConfigDict(extra="allow")

    notification_type: Any = None
    subject: Any = None
    media: Any = None


def _error_details(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


@router.post("/webhook", dependencies=[Depends(verify_webhook_auth)])
async def receive_webhook(
    body: WebhookPayload,
    svc: RelayService = Depends(relay_service),
) -> Any:
    log.debug("webhook_received", payload=body.model_dump())

    try:
        outcome = await svc.handle(
            notification_type=body.notification_type,
            subject=body.subject,
            media=body.media,
        )
    except InvalidPayloadError as e:
        log.warning("webhook_rejected", reason=str(e))
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={"error": "Invalid webhook payload", "details": str(e)},
        )
    except Exception as e:
        log.exception("webhook_dispatch_failed", notification_type=body.notification_type)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to process request", "details": _error_details(e)},
        )

    log.info("webhook_handled", outcome=outcome.value)
    return {"success": True}


# --- Module Notes -----------------------------------------------------------
# Ignored notification types (TEST_NOTIFICATION, MEDIA_PENDING, ...) still answer
# 200 so the request manager does not mark the webhook agent as failing.

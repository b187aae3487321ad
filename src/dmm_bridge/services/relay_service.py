"""
dmm_bridge.services.relay_service

Notification relay service.

Responsibilities:
- Classify the notification type (approved family vs everything else).
- Extract the media target (provider-keyed identifier + display title).
- Invoke the dispatcher once per approval and report the outcome.
"""

from __future__ import annotations

import enum
from typing import Any

from dmm_bridge.dispatch.models import Dispatcher, MediaTarget
from dmm_bridge.observability.logging import get_logger

log = get_logger(__name__)

APPROVED_TYPES = frozenset({"MEDIA_APPROVED", "MEDIA_AUTO_APPROVED"})


class RelayOutcome(str, enum.Enum):
    dispatched = "dispatched"
    ignored = "ignored"


class InvalidPayloadError(Exception):
    """Approved notification whose fields cannot be turned into a media target."""


def is_approved(notification_type: Any) -> bool:
    # Non-string types (a mangled template) are simply "not an approval".
    if not isinstance(notification_type, str):
        return False
    return notification_type.upper() in APPROVED_TYPES


def extract_target(*, media: Any, subject: Any) -> MediaTarget:
    if media is None:
        media = {}
    if not isinstance(media, dict):
        raise InvalidPayloadError(f"media must be an object, got {type(media).__name__}")
    if subject is not None and not isinstance(subject, str):
        raise InvalidPayloadError(f"subject must be a string, got {type(subject).__name__}")

    raw_media_type = media.get("media_type") or "movie"
    if not isinstance(raw_media_type, str):
        raise InvalidPayloadError("media.media_type must be a string")
    media_type = raw_media_type.lower()
    title = subject or ""

    tmdb_id = _as_id(media.get("tmdbId"))
    if tmdb_id:
        return MediaTarget(provider="tmdb", external_id=tmdb_id, title=title, media_type=media_type)

    # Overseerr sends tvdbId for series; some shows only resolve on TVDB.
    tvdb_id = _as_id(media.get("tvdbId"))
    if media_type == "tv" and tvdb_id:
        return MediaTarget(provider="tvdb", external_id=tvdb_id, title=title, media_type=media_type)

    raise InvalidPayloadError(f"no media identifier in {media_type} notification")


def _as_id(raw: Any) -> str:
    # Template variables arrive as strings; an unset one renders as "".
    if isinstance(raw, bool) or not isinstance(raw, str | int):
        return ""
    return str(raw).strip()


class RelayService:
    def __init__(self, *, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def handle(
        self,
        *,
        notification_type: Any,
        subject: Any,
        media: Any,
    ) -> RelayOutcome:
        if not is_approved(notification_type):
            log.info("notification_ignored", notification_type=notification_type)
            return RelayOutcome.ignored

        target = extract_target(media=media, subject=subject)
        log.info(
            "notification_approved",
            notification_type=notification_type,
            provider=target.provider,
            external_id=target.external_id,
            title=target.title,
            dispatch_mode=self._dispatcher.mode,
        )
        await self._dispatcher.dispatch(target)
        return RelayOutcome.dispatched


# --- Module Notes -----------------------------------------------------------
# Dispatch exceptions propagate unchanged; the webhook router is the single
# place that turns them into a 500 response.
#
# Approved types are matched case-insensitively. Overseerr always sends upper
# case, but hand-edited templates for other request managers do not.

"""
dmm_bridge.dispatch.credentials

Client-side storage items that authenticate a discovery-site browser session.

Responsibilities:
- Map configured credential schemes onto the site's `localStorage` keys.
"""

from __future__ import annotations

import json

from dmm_bridge.settings import Settings

BEARER_KEY = "token"
RD_ACCESS_TOKEN_KEY = "rd:accessToken"
RD_CLIENT_ID_KEY = "rd:clientId"
RD_CLIENT_SECRET_KEY = "rd:clientSecret"
RD_REFRESH_TOKEN_KEY = "rd:refreshToken"
RD_CAST_TOKEN_KEY = "rd:castToken"


def storage_items(settings: Settings) -> dict[str, str]:
    """
    Build the `localStorage` entries for every configured scheme.

    The site reads `rd:*` values with JSON.parse, so plain strings are stored
    JSON-encoded. The access token is stored verbatim: operators copy it out of
    an existing browser session, where it is already a JSON document.
    """
    items: dict[str, str] = {}
    if settings.has_bearer:
        items[BEARER_KEY] = settings.dmm_token or ""
    if settings.has_debrid:
        items[RD_ACCESS_TOKEN_KEY] = settings.rd_access_token or ""
        items[RD_CLIENT_ID_KEY] = json.dumps(settings.rd_client_id)
        items[RD_CLIENT_SECRET_KEY] = json.dumps(settings.rd_client_secret)
        items[RD_REFRESH_TOKEN_KEY] = json.dumps(settings.rd_refresh_token)
        if settings.rd_cast_token:
            items[RD_CAST_TOKEN_KEY] = json.dumps(settings.rd_cast_token)
    return items


# --- Module Notes -----------------------------------------------------------
# Key names follow what the site's own login flow writes; if the site renames
# them, this module is the only place that changes.

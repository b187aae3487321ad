"""
dmm_bridge.dispatch.factory

Dispatcher selection.

Responsibilities:
- Map DISPATCH_MODE onto a concrete dispatcher built from settings.
"""

from __future__ import annotations

from dmm_bridge.dispatch.api_client import ApiDispatcher
from dmm_bridge.dispatch.browser import BrowserDispatcher
from dmm_bridge.dispatch.models import Dispatcher
from dmm_bridge.settings import Settings


def build_dispatcher(settings: Settings) -> Dispatcher:
    # Settings validation already guarantees api mode has a bearer token.
    if settings.dispatch_mode == "api":
        return ApiDispatcher(settings=settings)
    # Browser mode launches nothing here; Chromium starts on the first approval.
    return BrowserDispatcher(settings=settings)


# --- Module Notes -----------------------------------------------------------
# Called once from the app lifespan; tests bypass it by injecting a dispatcher.

"""
dmm_bridge.dispatch.models

Dispatch domain types.

Responsibilities:
- `MediaTarget`: the identifier/title pair extracted from an approval.
- `Dispatcher`: the interface both outbound paths implement.
- `DispatchError`: the single failure type outbound paths raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

Provider = Literal["tmdb", "tvdb"]


@dataclass(frozen=True, slots=True)
class MediaTarget:
    provider: Provider
    external_id: str
    title: str
    media_type: str = "movie"

    @property
    def id_param(self) -> str:
        # Query parameter name the discovery site expects (tmdbId / tvdbId).
        return f"{self.provider}Id"


class DispatchError(Exception):
    """Outbound call or scripted step failed; message is safe to return to the caller."""


class Dispatcher(Protocol):
    mode: str

    async def dispatch(self, target: MediaTarget) -> None: ...

    async def close(self) -> None: ...


# --- Module Notes -----------------------------------------------------------
# `Dispatcher` is structural: ApiDispatcher, BrowserDispatcher and the test
# fake satisfy it without inheriting from anything.

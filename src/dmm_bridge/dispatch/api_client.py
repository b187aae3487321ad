"""
dmm_bridge.dispatch.api_client

HTTP dispatch path: one authenticated GET against the discovery site's API.

Responsibilities:
- Attach the static bearer token.
- Build the request path from the configured template and the media target.
- Translate httpx failures into `DispatchError`.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from dmm_bridge.dispatch.models import DispatchError, MediaTarget
from dmm_bridge.observability.logging import get_logger
from dmm_bridge.settings import Settings

log = get_logger(__name__)


class ApiDispatcher:
    mode = "api"

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        # An injected client is owned by the caller (tests use a MockTransport client).
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.request_timeout_seconds,
        )

    def _authz(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._settings.dmm_token}"}

    def path_for(self, target: MediaTarget) -> str:
        return self._settings.api_path_template.format(
            media_type=quote(target.media_type, safe=""),
            provider=quote(target.provider, safe=""),
            external_id=quote(target.external_id, safe=""),
        )

    async def dispatch(self, target: MediaTarget) -> None:
        path = self.path_for(target)
        log.info("api_dispatch", path=path, title=target.title)
        try:
            r = await self._http.get(path, headers=self._authz(), params={"title": target.title})
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DispatchError(
                f"{e.request.method} {e.request.url.path} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DispatchError(f"request to discovery site failed: {e!r}") from e
        log.info("api_dispatch_ok", status_code=r.status_code)

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()


# --- Module Notes -----------------------------------------------------------
# The response body is not interpreted: a 2xx means the site accepted the search.

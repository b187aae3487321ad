"""
tests.test_api_dispatcher

ApiDispatcher against an httpx MockTransport.
"""

from __future__ import annotations

import httpx
import pytest

from dmm_bridge.dispatch.api_client import ApiDispatcher
from dmm_bridge.dispatch.models import DispatchError, MediaTarget

MATRIX = MediaTarget(provider="tmdb", external_id="603", title="The Matrix (1999)")


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://dmm.example")


@pytest.mark.asyncio
async def test_get_is_authenticated_and_keyed_by_id(settings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    async with _client(handler) as http:
        await ApiDispatcher(settings=settings, http=http).dispatch(MATRIX)

    (req,) = seen
    assert req.method == "GET"
    assert req.url.path == "/api/movie/tmdb/603"
    assert req.url.params["title"] == "The Matrix (1999)"
    assert req.headers["authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_path_segments_are_quoted(settings) -> None:
    async with _client(lambda r: httpx.Response(200)) as http:
        dispatcher = ApiDispatcher(settings=settings, http=http)
        target = MediaTarget(provider="tmdb", external_id="60/3?x", title="")
        assert dispatcher.path_for(target) == "/api/movie/tmdb/60%2F3%3Fx"


@pytest.mark.asyncio
async def test_error_status_becomes_dispatch_error(settings) -> None:
    async with _client(lambda r: httpx.Response(404)) as http:
        with pytest.raises(DispatchError, match="returned 404"):
            await ApiDispatcher(settings=settings, http=http).dispatch(MATRIX)


@pytest.mark.asyncio
async def test_transport_error_becomes_dispatch_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as http:
        with pytest.raises(DispatchError, match="request to discovery site failed"):
            await ApiDispatcher(settings=settings, http=http).dispatch(MATRIX)


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open(settings) -> None:
    http = _client(lambda r: httpx.Response(200))
    await ApiDispatcher(settings=settings, http=http).close()
    assert not http.is_closed
    await http.aclose()


# --- Module Notes -----------------------------------------------------------
# No network: every request goes through MockTransport.

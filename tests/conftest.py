"""
tests.conftest

Shared fixtures.

Responsibilities:
- Provide baseline settings (bearer scheme) without touching process env.
- Provide a recording fake dispatcher and an app client that runs the lifespan.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import pytest
from fastapi import FastAPI

from dmm_bridge.dispatch.models import MediaTarget
from dmm_bridge.settings import Settings


class FakeDispatcher:
    mode = "fake"

    def __init__(self) -> None:
        self.targets: list[MediaTarget] = []
        self.error: BaseException | None = None
        self.closed = False

    async def dispatch(self, target: MediaTarget) -> None:
        self.targets.append(target)
        if self.error is not None:
            raise self.error

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(dmm_url="https://dmm.example", dmm_token="tok")


@pytest.fixture
def debrid_settings() -> Settings:
    return Settings(
        dmm_url="https://dmm.example/",
        rd_access_token='{"value":"access","expiry":1700000000000}',
        rd_client_id="client",
        rd_client_secret="secret",
        rd_refresh_token="refresh",
    )


@pytest.fixture
def fake_dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def app_client():
    @asynccontextmanager
    async def _client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
        # httpx ASGITransport does not run the lifespan; drive it explicitly.
        async with app.router.lifespan_context(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                yield client

    return _client


# --- Module Notes -----------------------------------------------------------
# Settings are built directly, never from env, so a stray DMM_* var cannot leak in.

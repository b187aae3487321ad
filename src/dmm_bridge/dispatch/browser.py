"""
dmm_bridge.dispatch.browser

Scripted browser dispatch path (Playwright).

Responsibilities:
- Own one lazily-launched Chromium instance for the life of the process.
- Walk the discovery site for each approval: load, log in, inject credentials,
  open the search view and click the first matching result.
- Translate Playwright failures into `DispatchError` naming the failed step.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from urllib.parse import quote, urlencode

from playwright.async_api import Browser, BrowserContext, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from dmm_bridge.dispatch.credentials import storage_items
from dmm_bridge.dispatch.models import DispatchError, MediaTarget
from dmm_bridge.observability.logging import get_logger
from dmm_bridge.settings import Settings

log = get_logger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

# Storage items travel as the evaluate() argument; nothing is spliced into the source.
STORE_CREDENTIALS_JS = """
(items) => {
  for (const [key, value] of Object.entries(items)) {
    window.localStorage.setItem(key, value);
  }
}
"""

BrowserLauncher = Callable[[], Awaitable[Browser]]


class BrowserDispatcher:
    mode = "browser"

    def __init__(self, *, settings: Settings, launcher: BrowserLauncher | None = None) -> None:
        self._settings = settings
        self._launcher = launcher or self._launch_chromium
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    async def _launch_chromium(self) -> Browser:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
        return await self._playwright.chromium.launch(
            headless=self._settings.browser_headless,
            args=LAUNCH_ARGS,
        )

    async def _ensure_browser(self) -> Browser:
        async with self._lock:
            if self._browser is not None and not self._browser.is_connected():
                log.warning("browser_disconnected")
                self._browser = None
            if self._browser is None:
                self._browser = await self._launcher()
                log.info("browser_launched", headless=self._settings.browser_headless)
            return self._browser

    def search_url(self, target: MediaTarget) -> str:
        query = urlencode(
            {target.id_param: target.external_id, "title": target.title},
            quote_via=quote,
        )
        return f"{self._settings.base_url}{self._settings.search_path}?{query}"

    async def dispatch(self, target: MediaTarget) -> None:
        s = self._settings
        context: BrowserContext | None = None
        step = "launch_browser"
        try:
            browser = await self._ensure_browser()

            step = "open_context"
            context = await browser.new_context()
            page = await context.new_page()
            page.set_default_timeout(s.browser_timeout_ms)

            step = "load_site"
            await page.goto(s.base_url)

            if s.login_selector:
                step = "login"
                await page.wait_for_selector(s.login_selector)
                await page.click(s.login_selector)

            step = "store_credentials"
            await page.evaluate(STORE_CREDENTIALS_JS, storage_items(s))

            step = "open_search"
            await page.goto(self.search_url(target))

            step = "select_result"
            await page.wait_for_selector(s.results_selector)
            await page.click(s.result_item_selector)
        except PlaywrightTimeoutError as e:
            log.error("browser_step_timeout", step=step, tmdb_id=target.external_id)
            raise DispatchError(f"timed out during {step}: {e.message}") from e
        except PlaywrightError as e:
            log.error("browser_step_failed", step=step, tmdb_id=target.external_id)
            raise DispatchError(f"browser step {step} failed: {e.message}") from e
        finally:
            if context is not None:
                # The browser may already be gone (shutdown mid-dispatch); keep the step error.
                with contextlib.suppress(PlaywrightError):
                    await context.close()

        log.info(
            "search_triggered",
            title=target.title,
            provider=target.provider,
            external_id=target.external_id,
        )

    async def close(self) -> None:
        async with self._lock:
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
                log.info("browser_closed")
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None


# --- Module Notes -----------------------------------------------------------
# Each dispatch gets its own browser context, so localStorage written for one
# approval never bleeds into another walkthrough running concurrently.

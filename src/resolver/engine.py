"""Playwright-backed browser engine used by the resolver.

The resolver only talks to the small surface defined here (launch, new_page,
request blocking, navigate, network idle, current_url, title, close), so tests
can swap in a fake engine with the same methods.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Frame,
    Page,
    Playwright,
    Route,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from ..errors import NavigationError, SessionLaunchError, TeardownError, TitleRetrievalError
from .browser_constants import NETWORK_IDLE
from .browser_models import LaunchOptions

logger = logging.getLogger(__name__)


class PlaywrightPage:
    """One tab inside an exclusively-owned browsing session."""

    def __init__(self, page: Page):
        self._page = page

    async def set_request_interception_policy(self, allow: Callable[[str], bool]) -> None:
        """Abort every request whose resource type the predicate rejects."""

        async def handle_route(route: Route) -> None:
            try:
                if allow(route.request.resource_type):
                    await route.continue_()
                else:
                    await route.abort()
            except PlaywrightError as e:
                # Route already handled or page closing
                logger.debug("Route handling failed for %s: %s", route.request.url, e)

        await self._page.route("**/*", handle_route)

    def on_main_frame_navigated(self, callback: Callable[[str], None]) -> None:
        page = self._page

        def handle_frame(frame: Frame) -> None:
            if frame == page.main_frame:
                callback(frame.url)

        page.on("framenavigated", handle_frame)

    async def navigate(self, url: str, *, wait_until: str, timeout_ms: int) -> None:
        try:
            await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NavigationError(f"Navigation timeout of {timeout_ms} ms exceeded") from e
        except PlaywrightError as e:
            raise NavigationError(f"Navigation failed: {str(e)[:200]}") from e

    async def wait_for_network_idle(self, timeout_ms: int) -> bool:
        """Wait for the network to go quiet; returns False if it never does.

        Pages holding a long-poll or beacon request open never reach idle, so
        running out of time here is not an error.
        """
        try:
            await self._page.wait_for_load_state(NETWORK_IDLE, timeout=timeout_ms)
        except PlaywrightTimeoutError:
            logger.debug("Network still busy after %d ms on %s", timeout_ms, self._page.url)
            return False
        except PlaywrightError as e:
            raise NavigationError(f"Navigation failed: {str(e)[:200]}") from e
        return True

    def current_url(self) -> str:
        return self._page.url

    async def title(self) -> str:
        try:
            return await self._page.title()
        except PlaywrightError as e:
            raise TitleRetrievalError(str(e)[:200]) from e


class PlaywrightSession:
    """Browser process owned by a single resolution."""

    def __init__(self, playwright: Playwright, browser: Browser, protocol_timeout_ms: int):
        self._playwright = playwright
        self._browser = browser
        self._protocol_timeout_ms = protocol_timeout_ms
        self._context: Optional[BrowserContext] = None

    async def new_page(
        self,
        *,
        user_agent: str,
        extra_headers: dict[str, str],
        viewport: dict,
    ) -> PlaywrightPage:
        self._context = await self._browser.new_context(
            user_agent=user_agent,
            extra_http_headers=extra_headers,
            viewport=viewport,
        )
        self._context.set_default_timeout(self._protocol_timeout_ms)
        page = await self._context.new_page()
        return PlaywrightPage(page)

    async def close(self) -> None:
        errors: list[str] = []
        try:
            await self._browser.close()
        except Exception as e:
            errors.append(f"browser: {e}")
        try:
            await self._playwright.stop()
        except Exception as e:
            errors.append(f"driver: {e}")
        if errors:
            raise TeardownError("; ".join(errors))


class PlaywrightEngine:
    """Launches one Chromium session per call."""

    async def launch(self, options: LaunchOptions) -> PlaywrightSession:
        try:
            playwright = await async_playwright().start()
        except Exception as e:
            raise SessionLaunchError(f"Failed to start browser driver: {str(e)[:200]}") from e

        try:
            browser = await playwright.chromium.launch(
                headless=options.headless,
                args=list(options.args),
                proxy=options.proxy,
                timeout=options.protocol_timeout_ms,
            )
        except Exception as e:
            try:
                await playwright.stop()
            except Exception as stop_error:
                logger.debug("Driver stop after failed launch raised: %s", stop_error)
            raise SessionLaunchError(f"Failed to launch browser: {str(e)[:200]}") from e

        return PlaywrightSession(playwright, browser, options.protocol_timeout_ms)

"""Redirect resolution: drive one browsing session from launch to teardown."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable, Optional

from ..errors import ClientInputError, SessionLaunchError
from .browser_constants import (
    ACCEPT_LANGUAGE,
    BLOCKED_RESOURCE_TYPES,
    LAUNCH_ARGS,
    LOAD_STATE,
    NETWORK_IDLE_WAIT_MS,
    PROTOCOL_TIMEOUT_MS,
    PROXY_PROTOCOL_TIMEOUT_MS,
    USER_AGENT,
    VIEWPORT,
    clamp_navigation_timeout,
    clamp_settle_wait,
    is_absolute_http_url,
)
from .browser_models import LaunchOptions, ResolutionRequest, ResolutionResult
from .engine import PlaywrightEngine
from .redirects import RedirectChainTracker

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)


class RedirectResolver:
    """Follows HTTP and JavaScript redirects for a URL in a headless browser.

    Every call to ``resolve`` launches its own session and closes it before
    returning, whatever the outcome.
    """

    def __init__(
        self,
        engine=None,
        *,
        headless: bool = True,
        user_agent: str = USER_AGENT,
        accept_language: str = ACCEPT_LANGUAGE,
        viewport: Optional[dict] = None,
        blocked_resource_types: Iterable[str] = BLOCKED_RESOURCE_TYPES,
        extra_launch_args: Iterable[str] = (),
        max_concurrent_sessions: int = 0,
    ):
        self.engine = engine or PlaywrightEngine()
        self.headless = headless
        self.user_agent = user_agent
        self.accept_language = accept_language
        self.viewport = dict(viewport or VIEWPORT)
        self.blocked_resource_types = frozenset(blocked_resource_types)
        self.extra_launch_args = tuple(extra_launch_args)
        self._semaphore = (
            asyncio.Semaphore(max_concurrent_sessions) if max_concurrent_sessions > 0 else None
        )

    @classmethod
    def from_config(cls, config: "Config", engine=None) -> "RedirectResolver":
        return cls(
            engine,
            headless=config.browser_headless,
            user_agent=config.user_agent,
            accept_language=config.accept_language,
            viewport=config.viewport,
            blocked_resource_types=config.blocked_resource_types,
            extra_launch_args=config.extra_launch_args,
            max_concurrent_sessions=config.max_concurrent_sessions,
        )

    def build_launch_options(self, request: ResolutionRequest) -> LaunchOptions:
        args = [*LAUNCH_ARGS, *(a for a in self.extra_launch_args if a not in LAUNCH_ARGS)]
        proxy = None
        if request.proxy is not None:
            proxy = {"server": request.proxy.server}
            if request.proxy.has_credentials:
                proxy["username"] = request.proxy.username
                proxy["password"] = request.proxy.password
        return LaunchOptions(
            headless=self.headless,
            args=tuple(args),
            proxy=proxy,
            protocol_timeout_ms=PROXY_PROTOCOL_TIMEOUT_MS if request.proxy_mode else PROTOCOL_TIMEOUT_MS,
        )

    def _allow_resource(self, resource_type: str) -> bool:
        return resource_type not in self.blocked_resource_types

    async def resolve(self, request: ResolutionRequest) -> ResolutionResult:
        """Resolve ``request.url`` to its final destination.

        Raises ClientInputError for an invalid URL (no session is created).
        Any other failure is reported as an unsuccessful result.
        """
        if not is_absolute_http_url(request.url):
            raise ClientInputError("Invalid URL")

        if self._semaphore is None:
            return await self._resolve(request)
        async with self._semaphore:
            return await self._resolve(request)

    async def _resolve(self, request: ResolutionRequest) -> ResolutionResult:
        url = request.url
        proxy = request.proxy
        launch_options = self.build_launch_options(request)
        navigation_timeout = clamp_navigation_timeout(request.timeout_ms, proxy=proxy is not None)
        settle_wait = clamp_settle_wait(request.wait_ms)

        if proxy is not None:
            logger.info("Using proxy %s for %s", proxy.server, url)

        try:
            session = await self.engine.launch(launch_options)
        except SessionLaunchError as e:
            logger.error("Session launch failed for %s: %s", url, e)
            return ResolutionResult.failure(url, str(e))
        except Exception as e:
            logger.error("Session launch failed for %s: %s", url, e)
            return ResolutionResult.failure(url, f"Failed to launch browser: {str(e)[:200]}")

        tracker = RedirectChainTracker(url)
        try:
            page = await session.new_page(
                user_agent=self.user_agent,
                extra_headers={"Accept-Language": self.accept_language},
                viewport=dict(self.viewport),
            )
            await page.set_request_interception_policy(self._allow_resource)
            page.on_main_frame_navigated(tracker.record)

            await page.navigate(url, wait_until=LOAD_STATE, timeout_ms=navigation_timeout)
            await page.wait_for_network_idle(min(NETWORK_IDLE_WAIT_MS, navigation_timeout))

            # Give timer-driven JS redirects a chance to fire after network idle
            await self._settle(settle_wait)

            final_url = page.current_url()
            title = await self._read_title(page)
            chain = tracker.finalize()
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.error("Error resolving %s: %s", url, message)
            logger.debug("Navigations seen before failure: %s", tracker.observed)
            return ResolutionResult.failure(url, message)
        finally:
            await self._teardown(session, url)

        logger.info("Resolved %s -> %s (%d hops)", url, final_url, len(chain) - 1)
        return ResolutionResult(
            success=True,
            original_url=url,
            final_url=final_url,
            changed=final_url != url,
            title=title,
            redirect_chain=chain,
            proxy_used=proxy.endpoint if proxy is not None else "none",
        )

    async def _settle(self, wait_ms: int) -> None:
        if wait_ms > 0:
            await asyncio.sleep(wait_ms / 1000)

    @staticmethod
    async def _read_title(page) -> str:
        try:
            return await page.title() or ""
        except Exception as e:
            logger.debug("Title unavailable: %s", e)
            return ""

    @staticmethod
    async def _teardown(session, url: str) -> None:
        try:
            await session.close()
        except Exception as e:
            logger.warning("Failed to close browser for %s: %s", url, e)

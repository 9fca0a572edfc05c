"""Core resolver server initialization and lifecycle."""

from __future__ import annotations

import asyncio
import logging

from aiohttp import web

from ..resolver import RedirectResolver
from .rate_limiter import SlidingWindowRateLimiter
from .server_config import ServerConfig

logger = logging.getLogger(__name__)


class ResolverServerCoreMixin:
    """Core resolver server lifecycle."""

    def __init__(
        self,
        *,
        config: ServerConfig,
        resolver: RedirectResolver,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ):
        self.config = config
        self.resolver = resolver
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            max_requests=config.rate_limit_max_requests,
            window_seconds=float(config.rate_limit_window_seconds),
        )

        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None
        self._sweep_task: asyncio.Task | None = None

        # Auth runs before rate limiting
        self._app = web.Application(
            middlewares=[
                self._error_middleware,
                self._auth_middleware,
                self._rate_limit_middleware,
            ]
        )
        self._app.on_startup.append(self._start_sweeper)
        self._app.on_cleanup.append(self._stop_sweeper)
        self._register_routes()

    @property
    def app(self) -> web.Application:
        return self._app

    async def start(self) -> None:
        if self._runner:
            return
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, host=self.config.host, port=int(self.config.port))
        await self._site.start()
        logger.info("Resolver service listening on %s:%s", self.config.host, self.config.port)

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
        self._runner = None
        self._site = None
        self.rate_limiter.reset()

    async def _start_sweeper(self, app: web.Application) -> None:
        self._sweep_task = asyncio.create_task(self._sweep_loop())

    async def _stop_sweeper(self, app: web.Application) -> None:
        if self._sweep_task:
            self._sweep_task.cancel()
            try:
                await self._sweep_task
            except asyncio.CancelledError:
                pass
        self._sweep_task = None

    async def _sweep_loop(self) -> None:
        interval = max(1, int(self.config.rate_limit_sweep_seconds))
        while True:
            await asyncio.sleep(interval)
            removed = await self.rate_limiter.sweep()
            if removed:
                logger.debug(
                    "Rate limiter swept %d idle clients, %d still tracked",
                    removed,
                    len(self.rate_limiter),
                )

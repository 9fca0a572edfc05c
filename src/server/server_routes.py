"""Route registration and handlers for the resolver server."""

from __future__ import annotations

from aiohttp import web

from ..errors import ClientInputError, ResolverError
from .server_helpers import SERVICE_NAME, USAGE, _error_response


class ResolverServerRoutesMixin:
    """Route registration helper."""

    def _register_routes(self) -> None:
        self._app.router.add_get("/", self._index)
        self._app.router.add_get("/health", self._health)
        self._app.router.add_get("/resolve", self._resolve)

    async def _index(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok", "service": SERVICE_NAME, "usage": USAGE})

    async def _health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def _resolve(self, request: web.Request) -> web.Response:
        try:
            resolution = self._parse_resolution_request(request)
            result = await self.resolver.resolve(resolution)
        except ClientInputError as e:
            return _error_response(e)

        status = 200 if result.success else ResolverError.http_status
        return web.json_response(result.to_dict(), status=status)

"""Request parsing helpers for the resolver server."""

from __future__ import annotations

from aiohttp import web

from ..errors import ClientInputError
from ..resolver.browser_constants import (
    MAX_PROXY_NAVIGATION_TIMEOUT_MS,
    MAX_SETTLE_WAIT_MS,
    is_absolute_http_url,
)
from ..resolver.browser_models import ResolutionRequest
from ..resolver.proxy import build_proxy_config
from .server_helpers import _coerce_int


class ResolverServerRequestMixin:
    """Request helper utilities."""

    @staticmethod
    def _client_identity(request: web.Request) -> str:
        """Network address of the caller as seen by this process."""
        return request.remote or "unknown"

    @staticmethod
    def _parse_resolution_request(request: web.Request) -> ResolutionRequest:
        """Build a ResolutionRequest from query parameters.

        Raises ClientInputError for a missing/invalid url or bad proxy values.
        Numeric values that do not parse fall back to the defaults; the
        resolver applies the final clamps for the selected mode.
        """
        query = request.query
        url = (query.get("url") or "").strip()
        if not url:
            raise ClientInputError("url parameter is required")
        if not is_absolute_http_url(url):
            raise ClientInputError("Invalid URL")

        proxy = build_proxy_config(
            query.get("proxy_host"),
            query.get("proxy_port"),
            scheme=query.get("proxy_proto"),
            username=query.get("proxy_user"),
            password=query.get("proxy_pass"),
        )

        return ResolutionRequest(
            url=url,
            proxy=proxy,
            wait_ms=_coerce_int(query.get("wait"), default=None, min_value=0, max_value=MAX_SETTLE_WAIT_MS),
            timeout_ms=_coerce_int(
                query.get("timeout"),
                default=None,
                max_value=MAX_PROXY_NAVIGATION_TIMEOUT_MS,
            ),
        )

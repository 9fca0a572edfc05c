"""Shared helpers/constants for the resolver server."""

from __future__ import annotations

import re

from aiohttp import web

from ..errors import ResolverError

SERVICE_NAME = "URL Redirect Resolver"
USAGE = (
    "GET /resolve?url=https://example.com&token=YOUR_TOKEN"
    "&proxy_host=IP&proxy_port=PORT&proxy_user=USER&proxy_pass=PASS"
)
TOKEN_HEADER = "x-api-token"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _coerce_int(value: object, *, default: int | None, min_value: int | None = None, max_value: int | None = None) -> int | None:
    """Parse the leading integer of `value` ("1.5" -> 1, "20s" -> 20)."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        parsed = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return default
        parsed = int(match.group(1))
    if min_value is not None:
        parsed = max(min_value, parsed)
    if max_value is not None:
        parsed = min(max_value, parsed)
    return parsed


def _error_response(error: ResolverError, **kwargs) -> web.Response:
    """JSON `{"error": ...}` response with the status the error carries."""
    return web.json_response({"error": error.message}, status=error.http_status, **kwargs)

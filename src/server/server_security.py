"""Access gate and rate-limit middlewares for the resolver server."""

from __future__ import annotations

import logging
import secrets

from aiohttp import web

from ..errors import AuthError, RateLimitError, ResolverError
from .server_helpers import TOKEN_HEADER, _error_response

logger = logging.getLogger(__name__)

PROTECTED_PATHS = ("/resolve",)


def check_access(secret: str | None, token: str | None) -> None:
    """Raise AuthError unless access is open or `token` equals `secret` exactly."""
    if not secret:
        return
    if token is None or not secrets.compare_digest(token.encode("utf-8"), secret.encode("utf-8")):
        raise AuthError("Unauthorized")


class ResolverServerSecurityMixin:
    """Auth + rate limiting middlewares."""

    @staticmethod
    def _supplied_token(request: web.Request) -> str | None:
        return request.query.get("token") or request.headers.get(TOKEN_HEADER)

    @web.middleware
    async def _auth_middleware(self, request: web.Request, handler):  # type: ignore[override]
        if request.path not in PROTECTED_PATHS:
            return await handler(request)
        try:
            check_access(self.config.api_secret, self._supplied_token(request))
        except AuthError as e:
            logger.info("Rejected unauthenticated request from %s", self._client_identity(request))
            return _error_response(e)
        return await handler(request)

    @web.middleware
    async def _rate_limit_middleware(self, request: web.Request, handler):  # type: ignore[override]
        if request.path not in PROTECTED_PATHS:
            return await handler(request)
        identity = self._client_identity(request)
        try:
            await self.rate_limiter.check(identity)
        except RateLimitError as e:
            logger.info(
                "Rate limit hit for %s (%d in window, retry after %ss)",
                identity,
                self.rate_limiter.count(identity),
                e.retry_after,
            )
            return _error_response(e, headers={"Retry-After": str(e.retry_after)})
        return await handler(request)

    @web.middleware
    async def _error_middleware(self, request: web.Request, handler):  # type: ignore[override]
        try:
            return await handler(request)
        except web.HTTPException:
            raise
        except ResolverError as e:
            logger.error("Resolver error on %s: %s", request.path, e.message)
            return _error_response(e)
        except Exception as e:
            logger.exception("Unhandled error on %s: %s", request.path, e)
            return _error_response(ResolverError("Internal server error"))

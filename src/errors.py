"""Exception taxonomy for the redirect resolver."""

from __future__ import annotations


class ResolverError(Exception):
    """Base exception for resolver errors."""

    http_status = 500

    def __init__(self, message: str = ""):
        self.message = message or self.__class__.__doc__ or "Resolver error"
        super().__init__(self.message)


class ClientInputError(ResolverError):
    """Missing or malformed request input."""

    http_status = 400


class AuthError(ResolverError):
    """Supplied token does not match the configured secret."""

    http_status = 401


class RateLimitError(ResolverError):
    """Rate limit exceeded."""

    http_status = 429

    def __init__(self, retry_after: int, message: str = "Too many requests, retry in a minute"):
        self.retry_after = retry_after
        super().__init__(message)


class SessionLaunchError(ResolverError):
    """Browser engine failed to start a session."""

    pass


class NavigationError(ResolverError):
    """Navigation timed out or the engine reported a navigation fault."""

    pass


class TeardownError(ResolverError):
    """Closing the browsing session failed."""

    pass


class TitleRetrievalError(ResolverError):
    """Reading the page title failed."""

    pass

"""HTTP surface for the redirect resolver."""

from .rate_limiter import SlidingWindowRateLimiter
from .server import ResolverServer, ServerConfig, check_access

__all__ = [
    "ResolverServer",
    "ServerConfig",
    "SlidingWindowRateLimiter",
    "check_access",
]

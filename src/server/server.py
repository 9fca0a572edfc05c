"""Composed resolver server class."""

from __future__ import annotations

from .server_config import ServerConfig
from .server_core import ResolverServerCoreMixin
from .server_request import ResolverServerRequestMixin
from .server_routes import ResolverServerRoutesMixin
from .server_security import ResolverServerSecurityMixin, check_access


class ResolverServer(
    ResolverServerCoreMixin,
    ResolverServerSecurityMixin,
    ResolverServerRequestMixin,
    ResolverServerRoutesMixin,
):
    """Resolver HTTP server composed from mixins."""


__all__ = ["ResolverServer", "ServerConfig", "check_access"]

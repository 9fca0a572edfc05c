"""Redirect resolution modules."""

from .browser_models import LaunchOptions, ProxyDescriptor, ResolutionRequest, ResolutionResult
from .engine import PlaywrightEngine
from .orchestrator import RedirectResolver
from .proxy import build_proxy_config
from .redirects import RedirectChainTracker

__all__ = [
    "LaunchOptions",
    "PlaywrightEngine",
    "ProxyDescriptor",
    "RedirectChainTracker",
    "RedirectResolver",
    "ResolutionRequest",
    "ResolutionResult",
    "build_proxy_config",
]

"""Resolver data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ProxyDescriptor:
    """Upstream proxy used for one resolution."""

    host: str
    port: int
    scheme: str = "http"
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def server(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    def __repr__(self) -> str:
        # Keep credentials out of logs and tracebacks
        return (
            f"ProxyDescriptor(server={self.server!r}, "
            f"credentials={'yes' if self.has_credentials else 'no'})"
        )


@dataclass(frozen=True)
class ResolutionRequest:
    """Input to a single resolution."""

    url: str
    proxy: Optional[ProxyDescriptor] = None
    wait_ms: Optional[int] = None
    timeout_ms: Optional[int] = None

    @property
    def proxy_mode(self) -> bool:
        return self.proxy is not None


@dataclass(frozen=True)
class LaunchOptions:
    """Launch-time configuration for a browsing session."""

    headless: bool = True
    args: tuple[str, ...] = ()
    # May carry proxy credentials
    proxy: Optional[dict] = field(default=None, repr=False)
    protocol_timeout_ms: int = 60_000


@dataclass
class ResolutionResult:
    """Outcome of one resolution."""

    success: bool
    original_url: str
    final_url: str
    changed: bool = False
    title: str = ""
    redirect_chain: list[str] = field(default_factory=list)
    proxy_used: str = "none"
    error: Optional[str] = None

    @classmethod
    def failure(cls, original_url: str, error: str) -> "ResolutionResult":
        return cls(
            success=False,
            original_url=original_url,
            final_url=original_url,
            error=error,
        )

    def to_dict(self) -> dict:
        if not self.success:
            return {
                "success": False,
                "error": self.error or "Resolution failed",
                "original_url": self.original_url,
                "final_url": self.final_url,
            }
        return {
            "success": True,
            "original_url": self.original_url,
            "final_url": self.final_url,
            "changed": self.changed,
            "title": self.title,
            "redirect_chain": list(self.redirect_chain),
            "proxy_used": self.proxy_used,
        }

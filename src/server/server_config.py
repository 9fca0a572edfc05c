"""Resolver server configuration dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    api_secret: str = ""
    rate_limit_max_requests: int = 30
    rate_limit_window_seconds: int = 60
    rate_limit_sweep_seconds: int = 300

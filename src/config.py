"""Configuration management for the redirect resolver."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .resolver.browser_constants import (
    ACCEPT_LANGUAGE,
    BLOCKED_RESOURCE_TYPES,
    USER_AGENT,
    VIEWPORT,
)

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration loaded from environment."""

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 3000

    # Shared secret for /resolve (empty = open access)
    api_secret: str = ""

    # Sliding-window rate limiting
    rate_limit_max_requests: int = 30
    rate_limit_window_seconds: int = 60
    rate_limit_sweep_seconds: int = 300

    # Browser
    browser_headless: bool = True
    max_concurrent_sessions: int = 0  # 0 = unlimited

    # Paths
    config_dir: Path = field(default_factory=lambda: Path("./config"))

    log_level: str = "INFO"

    # Browser identity (override via config/resolver.yaml)
    user_agent: str = USER_AGENT
    accept_language: str = ACCEPT_LANGUAGE
    viewport: dict = field(default_factory=lambda: dict(VIEWPORT))
    blocked_resource_types: frozenset[str] = field(
        default_factory=lambda: frozenset(BLOCKED_RESOURCE_TYPES)
    )
    extra_launch_args: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.config_dir = Path(self.config_dir)


def _load_overrides(config_dir: Path) -> dict:
    """Load browser identity overrides from config/resolver.yaml (optional)."""
    path = Path(config_dir or ".") / "resolver.yaml"
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except Exception as exc:
        logger.warning("Failed to parse resolver.yaml: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring resolver.yaml: expected a mapping at top level")
        return {}

    overrides: dict[str, object] = {}

    for key in ("user_agent", "accept_language"):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            overrides[key] = value.strip()

    viewport = data.get("viewport")
    if isinstance(viewport, dict):
        try:
            overrides["viewport"] = {
                "width": int(viewport.get("width", VIEWPORT["width"])),
                "height": int(viewport.get("height", VIEWPORT["height"])),
            }
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid viewport override: %r", viewport)

    blocked = data.get("blocked_resource_types")
    if isinstance(blocked, (list, tuple, set)):
        overrides["blocked_resource_types"] = frozenset(
            str(item).strip().lower() for item in blocked if str(item).strip()
        )

    extra_args = data.get("extra_launch_args")
    if isinstance(extra_args, list):
        overrides["extra_launch_args"] = [str(arg) for arg in extra_args if str(arg).startswith("--")]

    return overrides


def load_config() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    config_dir = Path(os.getenv("CONFIG_DIR", "./config"))
    overrides = _load_overrides(config_dir)

    return Config(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        api_secret=os.getenv("API_SECRET", ""),
        rate_limit_max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "30")),
        rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
        rate_limit_sweep_seconds=int(os.getenv("RATE_LIMIT_SWEEP_SECONDS", "300")),
        browser_headless=os.getenv("BROWSER_HEADLESS", "true").lower() == "true",
        max_concurrent_sessions=int(os.getenv("MAX_CONCURRENT_SESSIONS", "0")),
        config_dir=config_dir,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        **overrides,
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of error messages."""
    errors: list[str] = []
    if not 1 <= int(config.port) <= 65535:
        errors.append(f"PORT must be between 1 and 65535 (got {config.port})")
    if config.rate_limit_max_requests < 1:
        errors.append("RATE_LIMIT_MAX_REQUESTS must be at least 1")
    if config.rate_limit_window_seconds < 1:
        errors.append("RATE_LIMIT_WINDOW_SECONDS must be at least 1")
    if config.rate_limit_sweep_seconds < 1:
        errors.append("RATE_LIMIT_SWEEP_SECONDS must be at least 1")
    if config.max_concurrent_sessions < 0:
        errors.append("MAX_CONCURRENT_SESSIONS must not be negative")
    if logging.getLevelName(config.log_level) == f"Level {config.log_level}":
        errors.append(f"LOG_LEVEL {config.log_level!r} is not a logging level")

    if not config.api_secret:
        logger.info("No API_SECRET configured; /resolve is open to all callers")

    return errors

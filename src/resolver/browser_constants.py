"""Browser session constants and helpers."""

from __future__ import annotations

from urllib.parse import urlparse

# Launch switches for a containerized headless Chromium
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-zygote",
    "--disable-extensions",
    "--disable-background-networking",
    "--disable-default-apps",
    "--disable-sync",
    "--disable-translate",
    "--mute-audio",
    "--hide-scrollbars",
]

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "tr-TR,tr;q=0.9,en-US;q=0.8,en;q=0.7"
VIEWPORT = {"width": 1366, "height": 768}

# Resource types that can never trigger a document navigation
BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})

BLANK_PAGE_URL = "about:blank"
# goto waits for the load event; network idle is a separate bounded wait
LOAD_STATE = "load"
NETWORK_IDLE = "networkidle"

# Timeouts (ms)
PROTOCOL_TIMEOUT_MS = 60_000
PROXY_PROTOCOL_TIMEOUT_MS = 120_000
NAVIGATION_TIMEOUT_MS = 45_000
PROXY_NAVIGATION_TIMEOUT_MS = 90_000
MAX_NAVIGATION_TIMEOUT_MS = 60_000
MAX_PROXY_NAVIGATION_TIMEOUT_MS = 120_000
MIN_NAVIGATION_TIMEOUT_MS = 1_000
NETWORK_IDLE_WAIT_MS = 10_000

SETTLE_WAIT_MS = 8_000
MAX_SETTLE_WAIT_MS = 15_000

ALLOWED_URL_SCHEMES = ("http", "https")


def is_absolute_http_url(value: str | None) -> bool:
    """Return True for a well-formed absolute http(s) URL."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parsed = urlparse(value)
        # Accessing .port validates the port component
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_URL_SCHEMES and bool(parsed.hostname)


def clamp_settle_wait(wait_ms: int | None) -> int:
    if wait_ms is None:
        return SETTLE_WAIT_MS
    return max(0, min(int(wait_ms), MAX_SETTLE_WAIT_MS))


def clamp_navigation_timeout(timeout_ms: int | None, *, proxy: bool) -> int:
    if timeout_ms is None:
        return PROXY_NAVIGATION_TIMEOUT_MS if proxy else NAVIGATION_TIMEOUT_MS
    ceiling = MAX_PROXY_NAVIGATION_TIMEOUT_MS if proxy else MAX_NAVIGATION_TIMEOUT_MS
    return max(MIN_NAVIGATION_TIMEOUT_MS, min(int(timeout_ms), ceiling))

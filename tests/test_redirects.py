"""Tests for redirect chain tracking and URL helpers."""

from __future__ import annotations

import pytest

from src.resolver.browser_constants import (
    MAX_NAVIGATION_TIMEOUT_MS,
    MAX_PROXY_NAVIGATION_TIMEOUT_MS,
    MAX_SETTLE_WAIT_MS,
    NAVIGATION_TIMEOUT_MS,
    PROXY_NAVIGATION_TIMEOUT_MS,
    SETTLE_WAIT_MS,
    clamp_navigation_timeout,
    clamp_settle_wait,
    is_absolute_http_url,
)
from src.resolver.redirects import RedirectChainTracker


def test_chain_starts_with_original_url():
    tracker = RedirectChainTracker("http://example.com/")
    assert tracker.finalize() == ["http://example.com/"]


def test_blank_and_empty_urls_are_ignored():
    tracker = RedirectChainTracker("http://a.test/")
    tracker.record("about:blank")
    tracker.record("")
    tracker.record(None)
    assert tracker.finalize() == ["http://a.test/"]


def test_duplicates_removed_in_first_seen_order():
    tracker = RedirectChainTracker("http://a.test/")
    for url in ["http://a.test/", "http://b.test/", "http://c.test/", "http://b.test/", "http://d.test/"]:
        tracker.record(url)
    assert tracker.finalize() == ["http://a.test/", "http://b.test/", "http://c.test/", "http://d.test/"]
    # Raw log keeps every observation
    assert len(tracker.observed) == 6


def test_no_url_normalization():
    tracker = RedirectChainTracker("http://a.test")
    tracker.record("http://a.test/")
    assert tracker.finalize() == ["http://a.test", "http://a.test/"]


@pytest.mark.parametrize(
    "value,expected",
    [
        ("http://example.com", True),
        ("https://example.com/path?q=1", True),
        ("HTTPS://EXAMPLE.COM", True),
        ("not a url", False),
        ("example.com", False),
        ("ftp://example.com", False),
        ("http://", False),
        ("http://exa mple.com", False),
        ("http://example.com:99999", False),
        ("", False),
        (None, False),
    ],
)
def test_is_absolute_http_url(value, expected):
    assert is_absolute_http_url(value) is expected


def test_clamp_settle_wait():
    assert clamp_settle_wait(None) == SETTLE_WAIT_MS
    assert clamp_settle_wait(20_000) == MAX_SETTLE_WAIT_MS
    assert clamp_settle_wait(-5) == 0
    assert clamp_settle_wait(500) == 500


def test_clamp_navigation_timeout_by_mode():
    assert clamp_navigation_timeout(None, proxy=False) == NAVIGATION_TIMEOUT_MS
    assert clamp_navigation_timeout(None, proxy=True) == PROXY_NAVIGATION_TIMEOUT_MS
    assert clamp_navigation_timeout(100_000, proxy=False) == MAX_NAVIGATION_TIMEOUT_MS
    assert clamp_navigation_timeout(100_000, proxy=True) == 100_000
    assert clamp_navigation_timeout(500_000, proxy=True) == MAX_PROXY_NAVIGATION_TIMEOUT_MS
    assert clamp_navigation_timeout(10, proxy=False) == 1_000

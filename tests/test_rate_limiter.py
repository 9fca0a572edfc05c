"""Tests for the sliding-window rate limiter."""

from __future__ import annotations

import asyncio

import pytest

from src.errors import RateLimitError
from src.server.rate_limiter import SlidingWindowRateLimiter


class _Clock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _limiter(clock: _Clock, **kwargs) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(clock=clock, **kwargs)


async def _admitted(limiter: SlidingWindowRateLimiter, identity: str) -> bool:
    try:
        await limiter.check(identity)
    except RateLimitError:
        return False
    return True


@pytest.mark.asyncio
async def test_admits_up_to_threshold_then_rejects():
    clock = _Clock()
    limiter = _limiter(clock)

    for _ in range(30):
        await limiter.check("10.0.0.1")

    with pytest.raises(RateLimitError) as excinfo:
        await limiter.check("10.0.0.1")
    assert excinfo.value.retry_after == 60
    # Rejected request was not recorded
    assert limiter.count("10.0.0.1") == 30


@pytest.mark.asyncio
async def test_identities_are_independent():
    clock = _Clock()
    limiter = _limiter(clock, max_requests=2)

    assert await _admitted(limiter, "a")
    assert await _admitted(limiter, "a")
    assert not await _admitted(limiter, "a")
    assert await _admitted(limiter, "b")


@pytest.mark.asyncio
async def test_window_elapses_and_count_resets():
    clock = _Clock()
    limiter = _limiter(clock, max_requests=1)

    assert await _admitted(limiter, "a")
    clock.advance(61)
    assert await _admitted(limiter, "a")
    assert limiter.count("a") == 1


@pytest.mark.asyncio
async def test_timestamp_exactly_window_old_is_dropped():
    clock = _Clock()
    limiter = _limiter(clock, max_requests=1)

    assert await _admitted(limiter, "a")
    clock.advance(60)
    assert await _admitted(limiter, "a")


@pytest.mark.asyncio
async def test_retry_after_tracks_oldest_request():
    clock = _Clock()
    limiter = _limiter(clock, max_requests=2)

    await limiter.check("a")
    clock.advance(20)
    await limiter.check("a")
    clock.advance(5)

    with pytest.raises(RateLimitError) as excinfo:
        await limiter.check("a")
    assert excinfo.value.retry_after == 35


@pytest.mark.asyncio
async def test_concurrent_burst_never_overcounts():
    clock = _Clock()
    limiter = _limiter(clock, max_requests=30)

    results = await asyncio.gather(*(_admitted(limiter, "burst") for _ in range(50)))

    assert sum(results) == 30
    assert limiter.count("burst") == 30


@pytest.mark.asyncio
async def test_sweep_removes_idle_identities_only():
    clock = _Clock()
    limiter = _limiter(clock)

    await limiter.check("old")
    clock.advance(45)
    await limiter.check("recent")
    clock.advance(20)

    removed = await limiter.sweep()

    assert removed == 1
    assert len(limiter) == 1
    assert limiter.count("recent") == 1
    assert limiter.count("old") == 0


@pytest.mark.asyncio
async def test_reset_clears_state():
    limiter = SlidingWindowRateLimiter()
    await limiter.check("a")
    limiter.reset()
    assert len(limiter) == 0
    assert limiter.count("a") == 0

"""Per-client sliding-window rate limiting."""

from __future__ import annotations

import asyncio
import math
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from ..errors import RateLimitError


@dataclass
class SlidingWindowRateLimiter:
    """
    Sliding-window rate limiter keyed by client identity.

    Admits at most `max_requests` per identity within the trailing
    `window_seconds`. Rejected requests are not recorded.
    """

    max_requests: int = 30
    window_seconds: float = 60.0
    clock: Callable[[], float] = time.monotonic
    _log: dict[str, deque[float]] = field(default_factory=dict, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    def _prune(self, entries: deque[float], now: float) -> None:
        """Drop timestamps that fell out of the window."""
        cutoff = now - self.window_seconds
        while entries and entries[0] <= cutoff:
            entries.popleft()

    def _retry_after(self, entries: deque[float], now: float) -> int:
        if not entries:
            return 0
        return max(1, math.ceil(entries[0] + self.window_seconds - now))

    async def check(self, identity: str) -> None:
        """Record a request for `identity` or raise RateLimitError."""
        async with self._lock:
            now = self.clock()
            entries = self._log.get(identity)
            if entries is None:
                entries = self._log[identity] = deque()
            self._prune(entries, now)
            if len(entries) >= self.max_requests:
                raise RateLimitError(retry_after=self._retry_after(entries, now))
            entries.append(now)

    async def sweep(self) -> int:
        """Forget identities with no requests left in the window.

        Returns the number of identities removed.
        """
        async with self._lock:
            now = self.clock()
            stale = []
            for identity, entries in self._log.items():
                self._prune(entries, now)
                if not entries:
                    stale.append(identity)
            for identity in stale:
                del self._log[identity]
            return len(stale)

    def count(self, identity: str) -> int:
        """Requests currently counted against `identity`."""
        entries = self._log.get(identity)
        if not entries:
            return 0
        now = self.clock()
        cutoff = now - self.window_seconds
        return sum(1 for t in entries if t > cutoff)

    def reset(self) -> None:
        """Clear all tracked identities."""
        self._log.clear()

    def __len__(self) -> int:
        return len(self._log)

"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable

from xeoos.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Keeps a deque of hit timestamps per key.

    Hits older than the retention period are trimmed on every record; keys
    whose hits all expired are dropped so idle clients do not accumulate.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        retention_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(limit=limit, window_seconds=window_seconds, retention_seconds=retention_seconds)
        self._clock = clock
        self._lock = threading.RLock()
        self._hits: dict[str, deque[float]] = {}

    def _trim(self, hits: deque[float], cutoff: float) -> None:
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def check(self, key: str) -> RateLimitResult:
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()
        with self._lock:
            hits = self._hits.get(key)
            if not hits:
                return self._build_result(now=now, count=0, oldest=None)

            window_start = now - self._window_seconds
            in_window = [hit for hit in hits if hit > window_start]
            return self._build_result(
                now=now,
                count=len(in_window),
                oldest=in_window[0] if in_window else None,
            )

    def record(self, key: str) -> None:
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            hits.append(now)
            self._trim(hits, now - self._retention_seconds)

            # Opportunistic cleanup of idle keys
            if len(self._hits) > 1024:
                cutoff = now - self._retention_seconds
                for idle_key in [k for k, v in self._hits.items() if not v or v[-1] <= cutoff]:
                    del self._hits[idle_key]

"""Rate limiter interfaces.

Limiting is split in two steps so that only successful mutations count
against a client: ``check`` before doing work, ``record`` afterwards.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max recorded requests per window.
        remaining: Requests still allowed in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the oldest hit leaves the window.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Sliding-window limiter keyed by an opaque client key."""

    def __init__(self, *, limit: int, window_seconds: int, retention_seconds: int) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")
        if retention_seconds < window_seconds:
            raise ValueError("retention_seconds must be >= window_seconds")

        self._limit = limit
        self._window_seconds = window_seconds
        self._retention_seconds = retention_seconds

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def _build_result(self, *, now: float, count: int, oldest: float | None) -> RateLimitResult:
        """Turn a hit count inside the window into a RateLimitResult."""

        reset_at = (oldest if oldest is not None else now) + self._window_seconds
        if count < self._limit:
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - count - 1,
                reset_at=int(math.ceil(reset_at)),
                retry_after_seconds=None,
            )
        return RateLimitResult(
            allowed=False,
            limit=self._limit,
            remaining=0,
            reset_at=int(math.ceil(reset_at)),
            retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
        )

    @abstractmethod
    def check(self, key: str) -> RateLimitResult:
        """Drop hits older than the window and decide whether ``key`` may proceed.

        Does not record a hit.
        """
        raise NotImplementedError

    @abstractmethod
    def record(self, key: str) -> None:
        """Record one hit for ``key`` at the current time."""
        raise NotImplementedError

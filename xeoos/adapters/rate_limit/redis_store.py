"""Redis sorted-set sliding-window rate limiter.

Each client key maps to ``rate_limit:<key>``, a sorted set of hit timestamps
(milliseconds). Each member is the timestamp plus a random suffix so
hits landing in the same millisecond are counted separately. Shared by every worker process.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

import redis

from xeoos.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult

logger = logging.getLogger(__name__)


class RedisSlidingWindowRateLimiter(AbstractRateLimiter):
    """Sliding-window limiter backed by ZREMRANGEBYSCORE/ZCARD/ZADD/EXPIRE."""

    def __init__(
        self,
        client: redis.Redis,
        *,
        limit: int,
        window_seconds: int,
        retention_seconds: int,
        prefix: str = "rate_limit:",
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(limit=limit, window_seconds=window_seconds, retention_seconds=retention_seconds)
        self._client = client
        self._prefix = prefix
        self._clock = clock

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisSlidingWindowRateLimiter":
        return cls(redis.Redis.from_url(url, decode_responses=True), **kwargs)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def check(self, key: str) -> RateLimitResult:
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()
        now_ms = int(now * 1000)
        window_start_ms = now_ms - self._window_seconds * 1000

        pipe = self._client.pipeline()
        pipe.zremrangebyscore(self._key(key), "-inf", window_start_ms)
        pipe.zcard(self._key(key))
        pipe.zrange(self._key(key), 0, 0, withscores=True)
        _, count, oldest = pipe.execute()

        oldest_s = oldest[0][1] / 1000 if oldest else None
        return self._build_result(now=now, count=int(count), oldest=oldest_s)

    def record(self, key: str) -> None:
        if not key:
            raise ValueError("key must be a non-empty string")

        now_ms = int(self._clock() * 1000)
        redis_key = self._key(key)

        pipe = self._client.pipeline()
        pipe.zadd(redis_key, {f"{now_ms}-{uuid.uuid4().hex}": now_ms})
        pipe.expire(redis_key, self._retention_seconds)
        pipe.zremrangebyscore(redis_key, "-inf", now_ms - self._retention_seconds * 1000)
        pipe.execute()

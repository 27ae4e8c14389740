"""Rate limiting adapters.

The API layer depends only on :class:`AbstractRateLimiter`; the store behind
it is either process-local memory or a shared Redis instance.
"""

from xeoos.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from xeoos.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from xeoos.adapters.rate_limit.redis_store import RedisSlidingWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemorySlidingWindowRateLimiter",
    "RateLimitResult",
    "RedisSlidingWindowRateLimiter",
]

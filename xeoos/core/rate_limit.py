"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Strategy:
- Sliding window per client IP (proxy headers first, socket peer last).
- ``check`` happens in the dependency before the route does any work.
- The route awaits ``ticket.record()`` after a successful mutation, so
  rejected or failed requests do not eat into the budget. Routes that compare
  a secret code record in a ``finally`` block so wrong guesses are charged too.
- Limiter calls run in the threadpool; the Redis client is synchronous.
- Redis-backed when ``APP_REDIS_URL`` is set, in-memory otherwise.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool

from xeoos.adapters.rate_limit.base import AbstractRateLimiter
from xeoos.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from xeoos.adapters.rate_limit.redis_store import RedisSlidingWindowRateLimiter
from xeoos.core.config import settings
from xeoos.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)

_IP_HEADERS = ("x-real-ip", "x-forwarded-for", "x-vercel-proxied-for")

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return a process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
        settings.app.rate_limit_retention_seconds,
        settings.app.redis_url,
    )

    if _limiter is None or _limiter_config != config:
        kwargs = {
            "limit": settings.app.rate_limit_requests,
            "window_seconds": settings.app.rate_limit_window_seconds,
            "retention_seconds": settings.app.rate_limit_retention_seconds,
        }
        if settings.app.redis_url:
            _limiter = RedisSlidingWindowRateLimiter.from_url(settings.app.redis_url, **kwargs)
        else:
            _limiter = InMemorySlidingWindowRateLimiter(**kwargs)
        _limiter_config = config
        logger.info("rate_limit.configured", extra={"backend": type(_limiter).__name__})

    return _limiter


def reset_rate_limiter() -> None:
    """Drop the cached limiter so the next request builds a fresh one."""

    global _limiter, _limiter_config
    _limiter = None
    _limiter_config = None


def client_ip(request: Request) -> str:
    """Resolve the client IP from proxy headers, falling back to the socket peer."""

    for header in _IP_HEADERS:
        value = request.headers.get(header)
        if value:
            return value.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _hash_limiter_key(key: str) -> str:
    """Hash the rate limit key for logging without exposing client IPs."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


@dataclass
class RateLimitTicket:
    """Handle returned by the dependency; ``record`` charges the client."""

    key: str
    limiter: AbstractRateLimiter | None = None

    async def record(self) -> None:
        if self.limiter is None:
            return
        # Redis round-trips block, keep them off the event loop
        await run_in_threadpool(self.limiter.record, self.key)


async def enforce_rate_limit(request: Request) -> RateLimitTicket:
    """FastAPI dependency enforcing the per-IP sliding window.

    Raises:
        RateLimitAppError: 429 when the client is over budget.
    """

    key = client_ip(request)
    if not settings.app.rate_limit_enabled:
        return RateLimitTicket(key=key)

    limiter = get_rate_limiter()
    result = await run_in_threadpool(limiter.check, key)
    if result.allowed:
        return RateLimitTicket(key=key, limiter=limiter)

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": _hash_limiter_key(key),
            "limit": result.limit,
            "window_s": limiter.window_seconds,
            "retry_after_s": retry_after,
            "request_path": request.url.path,
        },
    )

    headers: dict[str, str] = {}
    if settings.app.rate_limit_include_headers:
        headers["Retry-After"] = str(retry_after)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset"] = str(result.reset_at)

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Too many requests, please try again later",
        details={"retry_after": retry_after},
        headers=headers or None,
    )


RateLimit = Annotated[RateLimitTicket, Depends(enforce_rate_limit)]

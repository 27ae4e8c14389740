"""Password hashing and one-time codes.

Passwords are interleaved with a configured buffer string and peppered before
argon2id hashing, so a leaked hash table alone is not enough to mount an
offline attack.
"""

from __future__ import annotations

import logging
import secrets
import time
from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import Type

from xeoos.core.config import settings

logger = logging.getLogger(__name__)


def shuffle(password: str, buffer: str | None = None, pepper: str | None = None) -> str:
    """Interleave ``buffer`` into ``password`` and append ``pepper``.

    After each password character the next buffer character is inserted,
    cycling through the buffer. An empty buffer inserts nothing.

    Examples:
        >>> shuffle("abc", buffer="XY", pepper="!")
        'aXbYcX!'
        >>> shuffle("abc", buffer="", pepper="")
        'abc'
    """

    insert = settings.auth.password_buffer if buffer is None else buffer
    suffix = settings.auth.password_pepper if pepper is None else pepper

    if not insert:
        return password + suffix

    parts = []
    for index, char in enumerate(password):
        parts.append(char)
        parts.append(insert[index % len(insert)])
    return "".join(parts) + suffix


@lru_cache(maxsize=1)
def _hasher(time_cost: int, memory_cost: int, parallelism: int, hash_len: int) -> PasswordHasher:
    return PasswordHasher(
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=hash_len,
        type=Type.ID,
    )


def get_hasher() -> PasswordHasher:
    """Return the argon2id hasher for the current settings."""

    cfg = settings.auth
    return _hasher(cfg.argon2_time_cost, cfg.argon2_memory_cost, cfg.argon2_parallelism, cfg.argon2_hash_len)


def hash_password(password: str) -> str:
    return get_hasher().hash(shuffle(password))


def verify_password(stored_hash: str | None, password: str) -> bool:
    """Check ``password`` against an argon2 hash; a corrupt hash never matches."""

    if not stored_hash:
        return False
    try:
        return get_hasher().verify(stored_hash, shuffle(password))
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError) as exc:
        logger.warning("password.verify_failed", extra={"error_type": type(exc).__name__})
        return False


def generate_code() -> str:
    """Return a 6-digit numeric verification code (100000-999999)."""

    return str(100000 + secrets.randbelow(900000))


def make_reset_code(code: str, now: float | None = None) -> str:
    """Serialize a reset code with its issue time (``"<code>+<unix seconds>"``)."""

    issued_at = int(time.time() if now is None else now)
    return f"{code}+{issued_at}"


def parse_reset_code(stored: str | None) -> tuple[str, int] | None:
    """Split a stored reset code into ``(code, issued_at)``; ``None`` if malformed."""

    if not stored or "+" not in stored:
        return None
    code, _, issued_at = stored.partition("+")
    if not code or not issued_at.isdigit():
        return None
    return code, int(issued_at)


def reset_code_expired(stored: str | None, now: float | None = None, ttl_seconds: int | None = None) -> bool:
    """Return True when a stored reset code is malformed or older than its TTL."""

    parsed = parse_reset_code(stored)
    if parsed is None:
        return True
    ttl = settings.auth.reset_code_ttl_seconds if ttl_seconds is None else ttl_seconds
    current = time.time() if now is None else now
    return current - parsed[1] > ttl


def codes_match(expected: str, given: str) -> bool:
    """Constant-time comparison of two secrets; any text, including non-ASCII."""

    return secrets.compare_digest(expected.encode("utf-8"), given.encode("utf-8"))

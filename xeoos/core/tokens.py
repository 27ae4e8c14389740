"""JWT issuing and verification.

Tokens are RS512-signed with PyJWT. The payload is the packed public view of
a user (see :func:`pack`); the registered ``exp``/``iat`` claims are added on
signing, which is why the user's experience points travel as ``userExp``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import jwt

from xeoos.core.config import settings
from xeoos.core.errors import AuthenticationAppError, TokenExpiredAppError

if TYPE_CHECKING:
    from xeoos.db.models import User

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^\s*(\d+)\s*(s|m|h|d|w|y)?\s*$", re.IGNORECASE)
_UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
    "y": 365 * 24 * 60 * 60,
}
# Longest lifetime a token may be issued for
MAX_DURATION_SECONDS = 10 * _UNIT_SECONDS["y"]


def parse_duration(value: int | str) -> int:
    """Convert a lifetime into seconds.

    Examples:
        >>> parse_duration(3600)
        3600
        >>> parse_duration("7d")
        604800
        >>> parse_duration("12h")
        43200

    Raises:
        ValueError: If the value is negative, longer than ten years or not a
            recognised duration.
    """

    if isinstance(value, bool):
        raise ValueError("duration must be an int or a duration string")
    if isinstance(value, int):
        seconds = value
    else:
        match = _DURATION_RE.match(str(value))
        if not match:
            raise ValueError(f"invalid duration: {value!r}")
        amount, unit = match.groups()
        seconds = int(amount) * _UNIT_SECONDS[(unit or "s").lower()]

    if seconds < 0:
        raise ValueError("duration must be >= 0")
    if seconds > MAX_DURATION_SECONDS:
        raise ValueError("duration is too long")
    return seconds


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def pack(user: "User", timestamp: datetime | None = None) -> dict[str, Any]:
    """Build the public user claims carried in the JWT and returned on login."""

    avatar = user.avatars[0] if user.avatars else None
    return {
        "uid": user.uid,
        "uuid": user.uuid,
        "avatar": (
            {"id": avatar.id, "emoji": avatar.emoji, "background": avatar.background}
            if avatar
            else None
        ),
        "username": user.username,
        "nickname": user.nickname,
        "email": user.email,
        "emailVerified": user.email_verified,
        "bio": user.bio,
        "birth": user.birth,
        "country": user.country,
        "timearea": user.timearea,
        "role": user.role,
        "emailNoticeLang": user.email_notice_lang,
        "createdAt": _iso(user.created_at),
        "updatedAt": _iso(user.updated_at),
        "lastUseAt": _iso(timestamp or datetime.now(timezone.utc)),
        "profileEmoji": user.profile_emoji,
        "gender": user.gender,
        "userExp": user.exp,
    }


def sign(inner: dict[str, Any], expired: int | str | None = None) -> str:
    """Sign ``inner`` as an RS512 JWT valid for ``expired`` (default from settings)."""

    if not settings.auth.jwt_private_key:
        raise RuntimeError("AUTH_JWT_PRIVATE_KEY is not configured")

    lifetime = parse_duration(expired if expired is not None else settings.auth.token_lifetime)
    now = datetime.now(timezone.utc)
    payload = {**inner, "iat": now, "exp": now + timedelta(seconds=lifetime)}
    return jwt.encode(payload, settings.auth.jwt_private_key, algorithm=settings.auth.jwt_algorithm)


def verify(token: str) -> dict[str, Any]:
    """Verify a JWT and return its claims.

    Raises:
        TokenExpiredAppError: The signature is valid but the token expired.
        AuthenticationAppError: Any other verification failure.
    """

    if not settings.auth.jwt_public_key:
        raise RuntimeError("AUTH_JWT_PUBLIC_KEY is not configured")

    try:
        claims = jwt.decode(
            token,
            settings.auth.jwt_public_key,
            algorithms=[settings.auth.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredAppError(code="token_expired", message="Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        logger.info("token.invalid", extra={"error_type": type(exc).__name__})
        raise AuthenticationAppError(code="token_invalid", message="Invalid token") from exc

    if not isinstance(claims, dict) or "uid" not in claims:
        raise AuthenticationAppError(code="token_invalid", message="Invalid token")
    return claims

"""Bearer-token authentication.

Routes declare who may call them through FastAPI dependencies:

- ``optional_user``: claims of a valid bearer token, or ``None``
- ``require_user``: claims of a valid bearer token, otherwise 401

A token that is malformed, expired or signed by another key is treated
exactly like a missing one; the caller is simply unauthenticated.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import Depends, Header

from xeoos.core import tokens
from xeoos.core.errors import AppError, AuthenticationAppError

logger = logging.getLogger(__name__)

Claims = dict[str, Any]


def extract_bearer(authorization: str | None) -> str | None:
    """Return the token part of an ``Authorization: Bearer <jwt>`` header.

    Examples:
        >>> extract_bearer("Bearer abc.def.ghi")
        'abc.def.ghi'
        >>> extract_bearer("abc") is None
        True
        >>> extract_bearer(None) is None
        True
    """
    if not authorization:
        return None

    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1].strip():
        return None
    return parts[1].strip()


async def optional_user(
    authorization: Annotated[str | None, Header()] = None,
) -> Claims | None:
    """FastAPI dependency returning the caller's claims, if authenticated."""

    token = extract_bearer(authorization)
    if token is None:
        return None

    try:
        return tokens.verify(token)
    except AppError as exc:
        logger.info("auth.rejected", extra={"reason": exc.code})
        return None


async def require_user(
    claims: Annotated[Claims | None, Depends(optional_user)],
) -> Claims:
    """FastAPI dependency that rejects unauthenticated callers with 401.

    Usage:
        @router.post("/post/create")
        async def create(user: Annotated[Claims, Depends(require_user)]): ...
    """
    if claims is None:
        raise AuthenticationAppError(code="unauthorized", message="Unauthorized")
    return claims


CurrentUser = Annotated[Claims, Depends(require_user)]
OptionalUser = Annotated[Claims | None, Depends(optional_user)]

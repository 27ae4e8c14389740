"""Pydantic schemas for account endpoints.

Credential fields are typed ``Any`` on purpose: the service reports missing
and non-string values with their own error codes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from xeoos.schemas.common import RequestBody


class SignupRequest(RequestBody):
    username: Any = Field(default=None, description="3 to 20 characters, unique.")
    password: Any = Field(default=None, description="6 to 50 characters.")
    email: Any = Field(default=None, description="Unique email address.")
    turnstile_token: str | None = Field(default=None, alias="turnstileToken")


class VerifyRequest(RequestBody):
    email: Any = None
    code: Any = None


class LoginRequest(RequestBody):
    email: Any = Field(default=None, description="Email address or username.")
    password: Any = None
    token: str | None = Field(default=None, description="Existing JWT to refresh instead of a password login.")
    expired_time: int | str | None = Field(
        default=None,
        alias="expiredTime",
        description="Token lifetime in seconds or as a duration string (7d, 12h).",
    )


class AvatarIn(BaseModel):
    emoji: str | None = None
    background: str | None = None


class ProfileUpdateRequest(RequestBody):
    nickname: Any = None
    bio: str | None = None
    birth: str | None = None
    country: str | None = None
    timearea: str | None = None
    gender: str | None = None
    profile_emoji: str | None = Field(default=None, alias="profileEmoji")
    email_notice_lang: str | None = Field(default=None, alias="emailNoticeLang")
    avatar: AvatarIn | None = None


class ResetSendRequest(RequestBody):
    email: Any = None
    turnstile_token: str | None = Field(default=None, alias="turnstileToken")


class ResetConfirmRequest(RequestBody):
    email: Any = None
    password: Any = None
    code: Any = None
    turnstile_token: str | None = Field(default=None, alias="turnstileToken")

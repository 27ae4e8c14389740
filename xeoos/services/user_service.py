"""Accounts: signup, email verification, login, profile and password reset.

Validation runs in the same order the client form checks fields so the first
reported problem matches what the user sees highlighted.
"""

from __future__ import annotations

import logging
import re
import secrets
from datetime import datetime, timezone
from typing import Any

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from xeoos.adapters.captcha.turnstile import AbstractCaptchaVerifier
from xeoos.adapters.email.base import AbstractEmailSender
from xeoos.core import passwords, tokens
from xeoos.core.errors import (
    AppError,
    AuthenticationAppError,
    NotFoundAppError,
    ValidationAppError,
)
from xeoos.core.logging import mask_email
from xeoos.db.models import GENDERS, Avatar, Post, User
from xeoos.i18n.locales import is_supported, resolve_locale
from xeoos.i18n.messages import translate
from xeoos.services import serializers
from xeoos.services.email_templates import password_reset_email, verification_email
from xeoos.services.paging import page_window

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

USERNAME_LENGTH = (3, 20)
PASSWORD_LENGTH = (6, 50)
MIN_LOGIN_PASSWORD = 5

PROFILE_LIMITS = {
    "nickname": 50,
    "bio": 255,
    "country": 20,
    "profile_emoji": 30,
}

DEFAULT_EMOJIS = (
    "😀", "😎", "🤓", "😊", "🚀", "🎨", "🌟", "🎸", "🐱", "🦄", "🌈", "🔥", "⚡", "🎯", "🌙", "🌸",
    "🎭", "🎪", "🎮", "📚", "🌍", "🔮", "🎊", "🌺", "🦋", "🌻", "🎵", "🌊", "🍀", "🎈", "🌤️",
)

DEFAULT_BACKGROUNDS = (
    "linear-gradient(135deg, #ff7e5f 0%, #feb47b 100%)",
    "linear-gradient(135deg, #6a11cb 0%, #2575fc 100%)",
    "linear-gradient(135deg, #ff9966 0%, #ff5e62 100%)",
    "linear-gradient(135deg, #00c6ff 0%, #0072ff 100%)",
    "linear-gradient(135deg, #f7971e 0%, #ffd200 100%)",
    "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
    "linear-gradient(135deg, #ff6b6b 0%, #ee5a52 100%)",
    "linear-gradient(135deg, #4ecdc4 0%, #44a08d 100%)",
    "linear-gradient(135deg, #45b7d1 0%, #96c93d 100%)",
    "linear-gradient(135deg, #96ceb4 0%, #ffeaa7 100%)",
    "linear-gradient(135deg, #dda0dd 0%, #ff7675 100%)",
    "linear-gradient(135deg, #74b9ff 0%, #fd79a8 100%)",
    "radial-gradient(circle, #ff6b6b 0%, #ee5a52 100%)",
    "radial-gradient(circle, #4ecdc4 0%, #44a08d 100%)",
    "radial-gradient(circle, #45b7d1 0%, #96c93d 100%)",
    "radial-gradient(circle, #96ceb4 0%, #ffeaa7 100%)",
    "radial-gradient(circle, #dda0dd 0%, #ff7675 100%)",
    "radial-gradient(circle, #74b9ff 0%, #fd79a8 100%)",
    "linear-gradient(135deg, #a8edea 0%, #fed6e3 100%)",
    "linear-gradient(135deg, #fad0c4 0%, #ffd1ff 100%)",
    "linear-gradient(135deg, #ffecd2 0%, #fcb69f 100%)",
    "linear-gradient(135deg, #ff8a80 0%, #ff80ab 100%)",
    "linear-gradient(135deg, #81c784 0%, #aed581 100%)",
    "linear-gradient(135deg, #64b5f6 0%, #42a5f5 100%)",
)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_email(email: str) -> None:
    if not EMAIL_RE.match(email):
        raise ValidationAppError(code="invalid_email_format", message="Invalid email format")


def _check_password_length(password: str) -> None:
    low, high = PASSWORD_LENGTH
    if not low <= len(password) <= high:
        raise ValidationAppError(
            code="password_length",
            message=f"Password must be between {low} and {high} characters",
            details={"field": "password"},
        )


class UserService:
    """Account operations. Routes own rate limiting; this class owns the rules."""

    def __init__(
        self,
        db: Session,
        email_sender: AbstractEmailSender,
        captcha: AbstractCaptchaVerifier,
    ) -> None:
        self.db = db
        self.email_sender = email_sender
        self.captcha = captcha

    def _by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == email))

    def _login_payload(self, user: User, expired: Any = None) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        user.last_use_at = now
        self.db.commit()

        claims = tokens.pack(user, now)
        try:
            jwt = tokens.sign(claims, expired)
        except ValueError as exc:
            raise ValidationAppError(
                code="invalid_request",
                message="Invalid token lifetime",
                details={"field": "expiredTime"},
            ) from exc
        return {"ok": True, "user": claims, "jwt": jwt}

    async def create(
        self,
        *,
        username: Any,
        password: Any,
        email: Any,
        turnstile_token: str | None,
        locale: str | None,
        remote_ip: str | None = None,
    ) -> dict[str, Any]:
        """Register a user and email them a verification code.

        Raises:
            ValidationAppError: Invalid input, failed captcha or a taken name/email.
            ExternalServiceAppError: The verification email could not be sent.
        """

        if not username or not password or not email:
            raise ValidationAppError(code="missing_fields", message="Username, password and email are required")
        if not all(isinstance(value, str) for value in (username, password, email)):
            raise ValidationAppError(code="invalid_format", message="Username, password and email must be text")

        low, high = USERNAME_LENGTH
        if not low <= len(username) <= high:
            raise ValidationAppError(
                code="username_length",
                message=f"Username must be between {low} and {high} characters",
                details={"field": "username"},
            )
        _check_password_length(password)
        _check_email(email)

        await self.captcha.verify(turnstile_token, remote_ip)

        if self.db.scalar(select(User.uid).where(User.username == username)) is not None:
            raise ValidationAppError(code="username_taken", message="Username already exists", details={"field": "username"})
        if self.db.scalar(select(User.uid).where(User.email == email)) is not None:
            raise ValidationAppError(code="email_taken", message="Email already exists", details={"field": "email"})

        resolved = resolve_locale(locale)
        code = passwords.generate_code()
        user = User(
            username=username,
            nickname=username,
            email=email,
            password=await run_in_threadpool(passwords.hash_password, password),
            email_verify_code=code,
            email_notice_lang=resolved,
        )
        user.avatars.append(
            Avatar(emoji=secrets.choice(DEFAULT_EMOJIS), background=secrets.choice(DEFAULT_BACKGROUNDS))
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationAppError(code="username_taken", message="Username already exists") from exc

        # Only keep the account once the code actually went out
        try:
            await self.email_sender.send(verification_email(email, code, resolved))
        except AppError:
            self.db.rollback()
            raise
        self.db.commit()

        logger.info("user.created", extra={"uid": user.uid, "recipient": mask_email(email)})
        return {"ok": True}

    def verify_email(self, email: Any, code: Any) -> dict[str, Any]:
        if not email or not code:
            raise ValidationAppError(code="missing_fields", message="Email and verification code are required")
        if not isinstance(email, str) or not isinstance(code, str):
            raise ValidationAppError(code="invalid_format", message="Invalid format")
        _check_email(email)

        user = self._by_email(email)
        if user is None:
            raise NotFoundAppError(code="user_not_found", message="User does not exist")
        if not user.email_verify_code or not passwords.codes_match(user.email_verify_code, code):
            raise ValidationAppError(code="invalid_code", message="Invalid verification code")

        user.email_verified = True
        user.email_verify_code = None
        self.db.commit()
        logger.info("user.verified", extra={"uid": user.uid})
        return {"ok": True, "message": translate("email_verified")}

    async def login(self, identifier: Any, password: Any, expired: Any = None) -> dict[str, Any]:
        """Password login; ``identifier`` is an email address or a username."""

        if not identifier or not password:
            raise ValidationAppError(code="missing_fields", message="Email and password are required")
        if not isinstance(identifier, str) or not isinstance(password, str):
            raise ValidationAppError(code="invalid_format", message="Invalid format")
        if len(password) < MIN_LOGIN_PASSWORD:
            raise ValidationAppError(code="password_too_short", message="Password is too short")

        user = self.db.scalar(select(User).where(or_(User.email == identifier, User.username == identifier)))
        # CPU-bound hash check runs in the threadpool
        matched = user is not None and await run_in_threadpool(passwords.verify_password, user.password, password)
        if not matched:
            logger.info("user.login_failed")
            raise ValidationAppError(code="invalid_credentials", message="Invalid credentials")

        logger.info("user.login", extra={"uid": user.uid})
        return self._login_payload(user, expired)

    def refresh(self, token: str, expired: Any = None) -> dict[str, Any]:
        """Exchange a still-valid JWT for a fresh one.

        Raises:
            TokenExpiredAppError: 410 when the token expired.
            ValidationAppError: The token is invalid or its user is gone.
        """

        try:
            claims = tokens.verify(token)
        except AuthenticationAppError as exc:
            raise ValidationAppError(code="token_invalid", message="Invalid token") from exc

        user = self.db.get(User, claims["uid"])
        if user is None:
            raise ValidationAppError(code="user_not_found", message="User does not exist")

        logger.info("user.refreshed", extra={"uid": user.uid})
        return self._login_payload(user, expired)

    def username_available(self, username: str | None) -> dict[str, Any]:
        if not username:
            return {"ok": False}
        taken = self.db.scalar(select(User.uid).where(User.username == username))
        return {"ok": taken is None}

    def update_profile(self, uid: int, fields: dict[str, Any], avatar: dict[str, Any] | None = None) -> dict[str, Any]:
        """Update profile fields and optionally swap the avatar, in one transaction."""

        nickname = fields.get("nickname")
        if not nickname or not isinstance(nickname, str) or not nickname.strip():
            raise ValidationAppError(code="nickname_required", message="Nickname is required")

        values = {key: _blank_to_none(fields.get(key)) for key in (
            "bio", "birth", "country", "timearea", "profile_emoji", "email_notice_lang",
        )}
        values["nickname"] = nickname.strip()
        values["gender"] = _blank_to_none(fields.get("gender")) or "UNSET"

        for key, limit in PROFILE_LIMITS.items():
            value = values.get(key)
            if value is not None and len(str(value)) > limit:
                raise ValidationAppError(
                    code="field_too_long",
                    message=f"{key} must be at most {limit} characters",
                    details={"field": key},
                )
        if values["gender"] not in GENDERS:
            raise ValidationAppError(code="invalid_gender", message="Invalid gender value", details={"field": "gender"})
        if values["email_notice_lang"] is not None and not is_supported(values["email_notice_lang"]):
            raise ValidationAppError(code="invalid_locale", message="Unsupported language", details={"field": "emailNoticeLang"})

        user = self.db.get(User, uid)
        if user is None:
            raise NotFoundAppError(code="user_not_found", message="User does not exist")

        lang = values.pop("email_notice_lang")
        for key, value in values.items():
            setattr(user, key, value)
        if lang:
            user.email_notice_lang = lang

        if avatar and avatar.get("emoji") and avatar.get("background"):
            user.avatars.clear()
            user.avatars.append(Avatar(emoji=str(avatar["emoji"]), background=str(avatar["background"])))

        self.db.commit()
        self.db.refresh(user)
        logger.info("user.updated", extra={"uid": uid})
        return {"ok": True, "user": tokens.pack(user, user.last_use_at)}

    def drafts(self, uid: int, page: Any = 1, locale: str | None = None) -> dict[str, Any]:
        window = page_window(page)
        query = select(Post).where(Post.user_uid == uid, Post.published.is_(False))

        drafts = self.db.scalars(
            query.order_by(Post.updated_at.desc()).offset(window.skip).limit(window.limit)
        ).all()
        total = self.db.scalar(select(func.count()).select_from(query.subquery())) or 0

        items = []
        for post in drafts:
            item = serializers.post_summary(post, locale)
            item["origin"] = post.origin
            items.append(item)

        return {
            "ok": True,
            "drafts": items,
            "hasMore": window.has_more(total),
            "total": total,
            "currentPage": window.page,
        }

    async def send_reset_code(
        self,
        email: Any,
        turnstile_token: str | None,
        locale: str | None,
        remote_ip: str | None = None,
    ) -> dict[str, Any]:
        if not email:
            raise ValidationAppError(code="missing_fields", message="Email is required")
        if not isinstance(email, str):
            raise ValidationAppError(code="invalid_format", message="Invalid format")
        _check_email(email)

        await self.captcha.verify(turnstile_token, remote_ip)

        user = self._by_email(email)
        if user is None:
            raise NotFoundAppError(code="user_not_found", message="User does not exist")

        code = passwords.generate_code()
        user.email_verify_code = passwords.make_reset_code(code)
        await self.email_sender.send(password_reset_email(email, code, locale))
        self.db.commit()

        logger.info("user.reset_code_sent", extra={"uid": user.uid})
        return {"ok": True}

    async def _apply_reset(self, email: Any, password: Any, code: Any) -> dict[str, Any]:
        if not email or not password or not code:
            raise ValidationAppError(code="missing_fields", message="Email, password and code are required")
        if not all(isinstance(value, str) for value in (email, password, code)):
            raise ValidationAppError(code="invalid_format", message="Invalid format")
        _check_email(email)
        _check_password_length(password)

        user = self._by_email(email)
        if user is None:
            raise NotFoundAppError(code="user_not_found", message="User does not exist")

        stored = user.email_verify_code
        if not stored:
            raise ValidationAppError(code="code_missing", message="No reset code was requested")
        if passwords.reset_code_expired(stored):
            raise ValidationAppError(code="code_expired", message="Reset code has expired")
        parsed = passwords.parse_reset_code(stored)
        if parsed is None or not passwords.codes_match(parsed[0], code):
            raise ValidationAppError(code="invalid_code", message="Invalid verification code")

        user.password = await run_in_threadpool(passwords.hash_password, password)
        user.email_verify_code = None
        self.db.commit()
        logger.info("user.password_reset", extra={"uid": user.uid})
        return {"ok": True}

    async def confirm_reset(
        self,
        email: Any,
        password: Any,
        code: Any,
        turnstile_token: str | None,
        remote_ip: str | None = None,
    ) -> dict[str, Any]:
        if not email or not password or not code:
            raise ValidationAppError(code="missing_fields", message="Email, password and code are required")
        await self.captcha.verify(turnstile_token, remote_ip)
        return await self._apply_reset(email, password, code)

    async def reset_password(
        self,
        *,
        email: Any,
        password: Any = None,
        code: Any = None,
        turnstile_token: str | None = None,
        locale: str | None = None,
        remote_ip: str | None = None,
    ) -> dict[str, Any]:
        """Legacy combined endpoint: confirm when a code is given, send otherwise."""

        if password and code:
            return await self._apply_reset(email, password, code)
        return await self.send_reset_code(email, turnstile_token, locale, remote_ip)

"""Cloudflare Turnstile verification."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from xeoos.adapters import http
from xeoos.core.config import settings
from xeoos.core.errors import ExternalServiceAppError, ValidationAppError

logger = logging.getLogger(__name__)


class AbstractCaptchaVerifier(ABC):
    @abstractmethod
    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        """Raise unless ``token`` proves a human solved the challenge.

        Raises:
            ValidationAppError: ``turnstile_required`` or ``turnstile_failed``.
            ExternalServiceAppError: ``verification_service_error``.
        """
        ...


class TurnstileVerifier(AbstractCaptchaVerifier):
    def __init__(
        self,
        secret_key: str | None,
        *,
        enabled: bool = True,
        verify_url: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._enabled = enabled
        self._verify_url = verify_url
        self._timeout = timeout_seconds
        self._transport = transport

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        if not self._enabled:
            return

        if not token:
            raise ValidationAppError(code="turnstile_required", message="Please complete the human verification")

        form = {"secret": self._secret_key or "", "response": token}
        if remote_ip:
            form["remoteip"] = remote_ip

        try:
            response = await http.request(
                "turnstile",
                "POST",
                self._verify_url,
                timeout=self._timeout,
                transport=self._transport,
                error_code="verification_service_error",
                data=form,
            )
            result = response.json()
        except ValueError as exc:
            raise ExternalServiceAppError(
                code="verification_service_error",
                message="Turnstile returned an unreadable response",
                details={"service": "turnstile"},
            ) from exc

        if not result.get("success"):
            logger.info("captcha.rejected", extra={"error_codes": result.get("error-codes")})
            raise ValidationAppError(code="turnstile_failed", message="Human verification failed")


def create_captcha_verifier() -> AbstractCaptchaVerifier:
    return TurnstileVerifier(
        settings.captcha.secret_key,
        enabled=settings.captcha.enabled,
        verify_url=settings.captcha.verify_url,
        timeout_seconds=settings.captcha.timeout_seconds,
    )

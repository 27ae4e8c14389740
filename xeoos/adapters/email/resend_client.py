"""Resend REST adapter."""

from __future__ import annotations

import logging

import httpx

from xeoos.adapters import http
from xeoos.adapters.email.base import AbstractEmailSender, EmailMessage
from xeoos.core.logging import mask_email

logger = logging.getLogger(__name__)


class ResendEmailSender(AbstractEmailSender):
    def __init__(
        self,
        api_key: str,
        *,
        from_address: str,
        api_base: str = "https://api.resend.com",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._from = from_address
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def send(self, message: EmailMessage) -> str | None:
        response = await http.request(
            "resend",
            "POST",
            f"{self._api_base}/emails",
            timeout=self._timeout,
            transport=self._transport,
            error_code="email_delivery_failed",
            headers={"Authorization": f"Bearer {self._api_key}"},
            json={
                "from": self._from,
                "to": message.to,
                "subject": message.subject,
                "html": message.html,
                "text": message.text,
            },
        )
        message_id = (response.json() or {}).get("id")
        logger.info(
            "email.sent",
            extra={"recipient": mask_email(message.to), "message_id": message_id},
        )
        return message_id

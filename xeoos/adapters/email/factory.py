"""Factory for the email adapter."""

from xeoos.adapters.email.base import AbstractEmailSender, DisabledEmailSender
from xeoos.adapters.email.resend_client import ResendEmailSender
from xeoos.core.config import settings


def create_email_sender() -> AbstractEmailSender:
    if not settings.email.resend_api_key:
        return DisabledEmailSender()
    return ResendEmailSender(
        settings.email.resend_api_key,
        from_address=settings.email.from_address,
        api_base=settings.email.api_base,
        timeout_seconds=settings.email.timeout_seconds,
    )

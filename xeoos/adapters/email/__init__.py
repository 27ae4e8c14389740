"""Outgoing email adapters."""

from xeoos.adapters.email.base import AbstractEmailSender, DisabledEmailSender, EmailMessage
from xeoos.adapters.email.factory import create_email_sender
from xeoos.adapters.email.resend_client import ResendEmailSender

__all__ = [
    "AbstractEmailSender",
    "DisabledEmailSender",
    "EmailMessage",
    "ResendEmailSender",
    "create_email_sender",
]

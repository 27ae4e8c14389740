"""Factory for the translate dispatcher."""

from xeoos.adapters.translate.base import AbstractTranslateDispatcher
from xeoos.adapters.translate.webhook_client import WebhookTranslateDispatcher
from xeoos.core.config import settings


def create_translate_dispatcher() -> AbstractTranslateDispatcher:
    return WebhookTranslateDispatcher(
        settings.translate.worker_url,
        settings.translate.worker_password,
        timeout_seconds=settings.translate.timeout_seconds,
    )

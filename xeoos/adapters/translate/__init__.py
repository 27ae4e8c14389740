"""Translate worker adapters."""

from xeoos.adapters.translate.base import AbstractTranslateDispatcher
from xeoos.adapters.translate.factory import create_translate_dispatcher
from xeoos.adapters.translate.webhook_client import WebhookTranslateDispatcher

__all__ = ["AbstractTranslateDispatcher", "WebhookTranslateDispatcher", "create_translate_dispatcher"]

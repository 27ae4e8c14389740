"""Factory for the realtime adapter."""

from xeoos.adapters.realtime.ably_client import AblyRealtime
from xeoos.adapters.realtime.base import AbstractRealtime, DisabledRealtime
from xeoos.core.config import settings


def create_realtime() -> AbstractRealtime:
    """Build the Ably adapter from settings, or a disabled stand-in without a key."""

    if not settings.realtime.api_key:
        return DisabledRealtime()
    return AblyRealtime(
        settings.realtime.api_key,
        rest_host=settings.realtime.rest_host,
        timeout_seconds=settings.realtime.timeout_seconds,
    )

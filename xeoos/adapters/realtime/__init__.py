"""Realtime pub/sub adapters (presence, publish, browser tokens)."""

from xeoos.adapters.realtime.ably_client import AblyRealtime
from xeoos.adapters.realtime.base import AbstractRealtime, DisabledRealtime
from xeoos.adapters.realtime.factory import create_realtime

__all__ = ["AblyRealtime", "AbstractRealtime", "DisabledRealtime", "create_realtime"]

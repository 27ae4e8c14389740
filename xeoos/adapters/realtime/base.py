from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from xeoos.core.errors import ExternalServiceAppError

logger = logging.getLogger(__name__)

BROADCAST_CHANNEL = "broadcast"
NEW_MESSAGE_EVENT = "new-message"


def user_channel(uid: int | str) -> str:
    return f"user-{uid}"


class AbstractRealtime(ABC):
    """Interface for the pub/sub service used for live notifications."""

    @abstractmethod
    async def publish(self, channel: str, name: str, data: Any) -> None:
        """Publish one message named ``name`` on ``channel``."""
        ...

    @abstractmethod
    async def presence(self, channel: str) -> list[str]:
        """Return the client ids currently present on ``channel``."""
        ...

    @abstractmethod
    async def request_token(
        self,
        client_id: str,
        *,
        ttl_ms: int,
        capability: dict[str, list[str]],
    ) -> dict[str, Any]:
        """Issue token details a browser client can connect with."""
        ...

    async def broadcast(self, message: dict[str, Any]) -> None:
        """Publish ``message`` to every connected client."""

        await self.publish(BROADCAST_CHANNEL, NEW_MESSAGE_EVENT, {"message": message})


class DisabledRealtime(AbstractRealtime):
    """Stand-in used when no pub/sub key is configured.

    Nobody is ever present and publishes are dropped, so notifications fall
    back to email. Token requests fail since no client could connect anyway.
    """

    async def publish(self, channel: str, name: str, data: Any) -> None:
        logger.info("realtime.disabled", extra={"channel": channel, "event": name})

    async def presence(self, channel: str) -> list[str]:
        return []

    async def request_token(self, client_id: str, *, ttl_ms: int, capability: dict[str, list[str]]) -> dict[str, Any]:
        raise ExternalServiceAppError(
            code="realtime_unavailable",
            message="Realtime service is not configured",
            details={"service": "ably"},
        )

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from xeoos.core.errors import ExternalServiceAppError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str
    text: str


class AbstractEmailSender(ABC):
    """Interface for transactional email delivery."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> str | None:
        """Deliver ``message`` and return the provider's message id, if any.

        Raises:
            ExternalServiceAppError: If the provider rejected or never received it.
        """
        ...


class DisabledEmailSender(AbstractEmailSender):
    """Stand-in used when no provider key is configured; every send fails."""

    async def send(self, message: EmailMessage) -> str | None:
        logger.warning("email.disabled", extra={"subject": message.subject})
        raise ExternalServiceAppError(
            code="email_delivery_failed",
            message="Email delivery is not configured",
            details={"service": "resend"},
        )

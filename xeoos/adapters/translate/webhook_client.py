"""Webhook dispatcher for the translate worker."""

from __future__ import annotations

import logging

import httpx

from xeoos.adapters import http
from xeoos.adapters.translate.base import AbstractTranslateDispatcher
from xeoos.core.errors import ExternalServiceAppError

logger = logging.getLogger(__name__)


class WebhookTranslateDispatcher(AbstractTranslateDispatcher):
    """POSTs ``{"password": ..., "task": ...}`` to the worker URL."""

    def __init__(
        self,
        worker_url: str | None,
        worker_password: str | None,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._worker_url = worker_url
        self._worker_password = worker_password
        self._timeout = timeout_seconds
        self._transport = transport

    async def dispatch(self, task_id: str) -> None:
        if not self._worker_url:
            raise ExternalServiceAppError(
                code="server_error",
                message="Translate worker URL is not configured",
                details={"service": "translate"},
            )

        await http.request(
            "translate",
            "POST",
            self._worker_url,
            timeout=self._timeout,
            transport=self._transport,
            json={"password": self._worker_password, "task": task_id},
        )
        logger.info("task.dispatched", extra={"task_id": task_id})

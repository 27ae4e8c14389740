"""Shared httpx plumbing for the third-party REST adapters."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from xeoos.core.errors import ExternalServiceAppError

logger = logging.getLogger(__name__)


async def request(
    service: str,
    method: str,
    url: str,
    *,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
    error_code: str = "server_error",
    **kwargs: Any,
) -> httpx.Response:
    """Send one request and map transport or HTTP failures to ExternalServiceAppError.

    Args:
        service: Short service name used in logs and error details.
        method: HTTP method.
        url: Absolute URL.
        timeout: Total timeout in seconds.
        transport: Optional transport (tests pass ``httpx.MockTransport``).
        error_code: Catalog code raised on failure.
        **kwargs: Forwarded to ``httpx.AsyncClient.request``.
    """

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        logger.warning(
            "external.http_error",
            extra={"service": service, "http_status": status_code, "method": method},
        )
        raise ExternalServiceAppError(
            code=error_code,
            message=f"{service} returned HTTP {status_code}",
            details={"service": service, "http_status": status_code},
        ) from exc
    except httpx.RequestError as exc:
        logger.warning(
            "external.request_failed",
            extra={"service": service, "error_type": type(exc).__name__, "method": method},
        )
        raise ExternalServiceAppError(
            code=error_code,
            message=f"{service} request failed",
            details={"service": service},
        ) from exc

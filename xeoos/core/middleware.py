"""HTTP middleware for request correlation and locale negotiation.

``request_id_middleware`` accepts an incoming ``X-Request-ID`` (or generates a
UUID), keeps it in a context variable for log correlation, and echoes it back
together with the total request duration.

``locale_middleware`` resolves the caller's locale from ``Accept-Language`` so
error messages rendered anywhere in the request come out in that language.

Usage:
    app.middleware("http")(locale_middleware)
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from xeoos.core.config import settings
from xeoos.core.logging import clear_request_id, set_request_id
from xeoos.i18n.locales import get_current_locale, set_current_locale


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate a request id through context, logs and response headers."""

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def locale_middleware(request: Request, call_next) -> Response:
    """Store the locale negotiated from ``Accept-Language`` for this request."""

    set_current_locale(request.headers.get("accept-language"))
    response: Response = await call_next(request)
    response.headers.setdefault("Content-Language", get_current_locale())
    return response

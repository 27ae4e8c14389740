"""Global exception handlers for consistent, localized error responses.

Design:
- AppError subclasses map to their HTTP status (400, 401, 403, 404, 410, 429, 502)
- Request validation failures become 400 ``invalid_request``
- Unexpected Exception becomes a generic 500 (safety net)
- Messages are rendered from the catalog in the request locale
- All responses include request_id for tracing
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from xeoos.core.errors import (
    AppError,
    AuthenticationAppError,
    ExternalServiceAppError,
    ForbiddenAppError,
    NotFoundAppError,
    RateLimitAppError,
    TokenExpiredAppError,
    ValidationAppError,
)
from xeoos.core.logging import get_request_id
from xeoos.i18n.messages import translate

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins.
_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (ValidationAppError, 400),
    (AuthenticationAppError, 401),
    (ForbiddenAppError, 403),
    (NotFoundAppError, 404),
    (TokenExpiredAppError, 410),
    (RateLimitAppError, 429),
    (ExternalServiceAppError, 502),
)


def status_for(exc: AppError) -> int:
    """Return the HTTP status code for a domain error (400 when unmapped)."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


def _error_body(code: str, message: str, details: dict | None = None) -> dict:
    error_content = {
        "code": code,
        "message": message,
        "request_id": get_request_id(),
    }
    if details:
        error_content["details"] = details
    return {"error": error_content}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with consistent JSON format.

    ``error.message`` is the catalog text for ``exc.code`` in the request
    locale, or the error's own message when the code is not in the catalog.
    """

    status_code = status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
        },
    )

    headers = exc.headers if isinstance(exc, RateLimitAppError) else None
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.code, translate(exc.code, default=exc.message), exc.details),
        headers=headers or None,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 ``invalid_request``.

    Only field locations and error types are echoed back, never input values.
    """

    fields = [
        {"field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info(
        "request_validation_failed",
        extra={"request_path": request.url.path, "fields": fields},
    )
    return JSONResponse(
        status_code=400,
        content=_error_body("invalid_request", translate("invalid_request"), {"context": {"fields": fields}}),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors; never leaks internals."""

    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content=_error_body("server_error", translate("server_error")),
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)

"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, localized messages, error format, and no
information leakage.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

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
from xeoos.core.exception_handlers import setup_exception_handlers, status_for
from xeoos.core.middleware import locale_middleware


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers and locale negotiation."""
    app = FastAPI()
    app.middleware("http")(locale_middleware)
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    """Create test client that returns 500 responses instead of re-raising."""
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_returns_400(self, client: TestClient, app_with_handlers: FastAPI):
        """Verify ValidationAppError returns HTTP 400."""
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(code="test_validation", message="Test validation error")

        response = client.get("/test-validation")

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "test_validation"
        assert data["error"]["message"] == "Test validation error"
        assert "request_id" in data["error"]

    def test_validation_error_includes_details(self, client: TestClient, app_with_handlers: FastAPI):
        """Verify details are passed through when provided."""
        @app_with_handlers.get("/test-validation-details")
        async def test_endpoint():
            raise ValidationAppError(
                code="username_length",
                message="Username must be between 3 and 20 characters",
                details={"field": "username"},
            )

        response = client.get("/test-validation-details")

        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"field": "username"}

    @pytest.mark.parametrize(
        ("error_type", "expected"),
        [
            (ValidationAppError, 400),
            (AuthenticationAppError, 401),
            (ForbiddenAppError, 403),
            (NotFoundAppError, 404),
            (TokenExpiredAppError, 410),
            (RateLimitAppError, 429),
            (ExternalServiceAppError, 502),
            (AppError, 400),
        ],
    )
    def test_status_mapping(self, error_type, expected):
        """Each error family maps to its HTTP status."""
        assert status_for(error_type(code="x", message="x")) == expected

    def test_catalog_message_is_localized(self, client: TestClient, app_with_handlers: FastAPI):
        """Known codes render from the catalog in the Accept-Language locale."""
        @app_with_handlers.get("/test-localized")
        async def test_endpoint():
            raise NotFoundAppError(code="post_not_found", message="Post not found")

        response = client.get("/test-localized", headers={"Accept-Language": "de-DE,de;q=0.9"})

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Post nicht gefunden"
        assert response.headers["Content-Language"] == "de-DE"

    def test_unknown_locale_falls_back_to_english(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-fallback")
        async def test_endpoint():
            raise AuthenticationAppError(code="unauthorized", message="Unauthorized")

        response = client.get("/test-fallback", headers={"Accept-Language": "xx-YY"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Unauthorized"

    def test_rate_limit_error_sets_headers(self, client: TestClient, app_with_handlers: FastAPI):
        """Verify throttling headers are forwarded on 429."""
        @app_with_handlers.get("/test-rate-limit")
        async def test_endpoint():
            raise RateLimitAppError(
                code="rate_limit_exceeded",
                message="Too many requests",
                details={"retry_after": 12},
                headers={"Retry-After": "12", "X-RateLimit-Limit": "30"},
            )

        response = client.get("/test-rate-limit")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "12"
        assert response.headers["X-RateLimit-Limit"] == "30"
        assert response.json()["error"]["details"]["retry_after"] == 12

    def test_error_response_format_is_consistent(self, client: TestClient, app_with_handlers: FastAPI):
        """Verify error responses have consistent JSON structure."""
        @app_with_handlers.get("/test-format")
        async def test_endpoint():
            raise ExternalServiceAppError(code="search_unavailable", message="down")

        response = client.get("/test-format")

        assert response.status_code == 502
        data = response.json()
        assert set(data) == {"error"}
        assert {"code", "message", "request_id"} <= set(data["error"])


class TestRequestValidationHandler:
    """Malformed request bodies become 400 invalid_request."""

    def test_wrong_type_returns_400(self, client: TestClient, app_with_handlers: FastAPI):
        class Body(BaseModel):
            draft: bool

        @app_with_handlers.post("/test-body")
        async def test_endpoint(body: Body):
            return {"ok": True}

        response = client.post("/test-body", json={"draft": {"nested": "value"}})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "invalid_request"
        assert error["details"]["context"]["fields"][0]["field"] == "draft"
        # Input values are never echoed back
        assert "nested" not in response.text


class TestGeneralExceptionHandler:
    """Unexpected exceptions become a generic 500."""

    def test_unhandled_exception_returns_500(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-crash")
        async def test_endpoint():
            raise RuntimeError("database password is hunter2")

        response = client.get("/test-crash")

        assert response.status_code == 500
        data = response.json()
        assert data["error"]["code"] == "server_error"
        assert "hunter2" not in response.text

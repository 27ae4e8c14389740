"""Unit tests for JWT handling and the bearer authentication dependencies."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from xeoos.core import tokens
from xeoos.core.auth import CurrentUser, OptionalUser, extract_bearer
from xeoos.core.config import settings
from xeoos.core.errors import AuthenticationAppError, TokenExpiredAppError
from xeoos.core.exception_handlers import setup_exception_handlers


class TestExtractBearer:
    """Test Authorization header parsing."""

    def test_extracts_token(self) -> None:
        assert extract_bearer("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_not_checked(self) -> None:
        """Only the second space-separated part matters."""
        assert extract_bearer("Token abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "abc", "Bearer ", "Bearer    "])
    def test_missing_token(self, header) -> None:
        assert extract_bearer(header) is None


class TestParseDuration:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3600, 3600), ("7d", 604800), ("12h", 43200), ("30m", 1800), ("45", 45), ("1w", 604800)],
    )
    def test_valid(self, value, expected) -> None:
        assert tokens.parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["soon", "-5", "7x", True, -1, "99999999999999d", "11y", 10**12])
    def test_invalid(self, value) -> None:
        with pytest.raises(ValueError):
            tokens.parse_duration(value)


class TestSignVerify:
    """Round trip through RS512 signing."""

    def test_verify_returns_claims(self) -> None:
        token = tokens.sign({"uid": 7, "username": "alice"}, "1h")

        claims = tokens.verify(token)

        assert claims["uid"] == 7
        assert claims["username"] == "alice"
        assert claims["exp"] - claims["iat"] == 3600

    def test_header_uses_rs512(self) -> None:
        token = tokens.sign({"uid": 1})
        assert jwt.get_unverified_header(token)["alg"] == "RS512"

    def test_expired_token_raises_token_expired(self) -> None:
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"uid": 1, "iat": past, "exp": past + timedelta(hours=1)},
            settings.auth.jwt_private_key,
            algorithm="RS512",
        )

        with pytest.raises(TokenExpiredAppError) as exc_info:
            tokens.verify(token)
        assert exc_info.value.code == "token_expired"

    def test_tampered_token_is_invalid(self) -> None:
        token = tokens.sign({"uid": 1})
        header, payload, signature = token.split(".")

        with pytest.raises(AuthenticationAppError) as exc_info:
            tokens.verify(f"{header}.{payload}.{signature[:-4]}AAAA")
        assert exc_info.value.code == "token_invalid"

    def test_token_without_uid_is_invalid(self) -> None:
        token = tokens.sign({"username": "nobody"})

        with pytest.raises(AuthenticationAppError):
            tokens.verify(token)

    def test_hs256_token_is_rejected(self) -> None:
        token = jwt.encode({"uid": 1}, "shared-secret", algorithm="HS256")

        with pytest.raises(AuthenticationAppError):
            tokens.verify(token)


class TestAuthDependencies:
    """CurrentUser rejects anonymous callers; OptionalUser lets them through."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = FastAPI()
        setup_exception_handlers(app)

        @app.get("/private")
        async def private(user: CurrentUser):
            return {"uid": user["uid"]}

        @app.get("/public")
        async def public(user: OptionalUser):
            return {"uid": user["uid"] if user else None}

        return TestClient(app)

    def test_valid_token_is_accepted(self, client: TestClient) -> None:
        token = tokens.sign({"uid": 42})

        response = client.get("/private", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"uid": 42}

    def test_missing_token_returns_401(self, client: TestClient) -> None:
        response = client.get("/private")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "unauthorized"

    def test_garbage_token_returns_401(self, client: TestClient) -> None:
        response = client.get("/private", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_optional_user_is_none_without_token(self, client: TestClient) -> None:
        response = client.get("/public", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 200
        assert response.json() == {"uid": None}

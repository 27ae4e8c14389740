"""Tests for request correlation and locale headers on the assembled app."""

from fastapi.testclient import TestClient

from xeoos.main import app

client = TestClient(app)


def test_incoming_request_id_is_echoed():
    response = client.get("/health", headers={"X-Request-ID": "req-abc-123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-abc-123"


def test_request_id_and_duration_are_generated():
    response = client.get("/health")

    assert response.headers.get("X-Request-ID")
    assert float(response.headers["X-Request-Duration-ms"]) >= 0


def test_health_reports_unconfigured_integrations():
    body = client.get("/health").json()

    assert body["status"] == "ok"
    assert body["integrations"]["search"] is False
    assert body["integrations"]["captcha"] is False


def test_error_body_carries_request_id():
    response = client.post("/api/post/create", json={}, headers={"X-Request-ID": "req-err-1"})

    assert response.status_code == 401
    assert response.json()["error"]["request_id"] == "req-err-1"


def test_content_language_follows_accept_language():
    response = client.get("/health", headers={"Accept-Language": "ja"})

    assert response.headers["Content-Language"] == "ja-JP"

"""Tests covering security and hardening features."""

from __future__ import annotations

from app import create_app
from conftest import AppTestConfig


def test_cors_allows_configured_origin(notifier):
    class CorsConfig(AppTestConfig):
        CORS_ORIGINS = ["https://client.example"]

    app = create_app(CorsConfig, notifier=notifier)
    client = app.test_client()

    response = client.get(
        "/health", headers={"Origin": "https://client.example"}
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "https://client.example"
    assert response.headers.get("X-Request-ID")


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_json_error_shape_for_invalid_request(client):
    response = client.post(
        "/users/register",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert "Request content type" in payload["detail"]
    assert payload["request_id"]


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/users/nope")

    assert response.status_code == 404
    payload = response.get_json()
    assert payload["error"] == "Not Found"
    assert "request_id" in payload

"""Tests for client IP resolution, security headers and rate limiting middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from civicos.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, get_client_ip


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/test")
    async def test_route() -> dict:
        return {"ok": True}

    return app


def _request(headers: dict[str, str] | None = None, client: tuple[str, int] | None = ("10.0.0.1", 1234)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


class TestGetClientIp:
    def test_cloudflare_header_wins(self) -> None:
        request = _request({"CF-Connecting-IP": "1.1.1.1", "X-Forwarded-For": "2.2.2.2"})
        assert get_client_ip(request) == "1.1.1.1"

    def test_forwarded_for_uses_leftmost(self) -> None:
        request = _request({"X-Forwarded-For": "203.0.113.5, 10.0.0.2, 10.0.0.3"})
        assert get_client_ip(request) == "203.0.113.5"

    def test_falls_back_to_connection(self) -> None:
        assert get_client_ip(_request()) == "10.0.0.1"

    def test_unknown_without_client(self) -> None:
        assert get_client_ip(_request(client=None)) == "unknown"

    def test_empty_trusted_list_ignores_headers(self) -> None:
        request = _request({"X-Real-IP": "198.51.100.7"})
        assert get_client_ip(request, trusted_headers=[]) == "10.0.0.1"


class TestSecurityHeadersMiddleware:
    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        return TestClient(app)

    def test_headers_present(self, client: TestClient) -> None:
        response = client.get("/test")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


class TestRateLimitMiddleware:
    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=3)
        return TestClient(app)

    def test_requests_within_limit_succeed(self, client: TestClient) -> None:
        for _ in range(3):
            assert client.get("/test").status_code == 200

    def test_over_limit_returns_error_envelope(self, client: TestClient) -> None:
        for _ in range(3):
            client.get("/test")

        response = client.get("/test")

        assert response.status_code == 429
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Rate limit exceeded"
        assert body["data"] is None

    def test_limits_are_per_client(self, client: TestClient) -> None:
        for _ in range(3):
            client.get("/test", headers={"X-Forwarded-For": "203.0.113.1"})

        assert client.get("/test", headers={"X-Forwarded-For": "203.0.113.1"}).status_code == 429
        assert client.get("/test", headers={"X-Forwarded-For": "203.0.113.2"}).status_code == 200

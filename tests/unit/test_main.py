"""Tests for the FastAPI application factory and error envelope handlers."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI, Query
from fastapi.testclient import TestClient

from civicos.core.config import Settings
from civicos.main import create_app, lifespan, register_exception_handlers
from civicos.services.friend_service import FriendNotFoundError
from civicos.services.politician_service import PoliticianNotFoundError

TEST_SECRET = "test-secret-key-not-for-production"


def _settings(**overrides) -> Settings:
    return Settings(database_url="sqlite+aiosqlite:///:memory:", jwt_secret_key=TEST_SECRET, **overrides)


class TestCreateApp:
    """Tests for create_app."""

    @pytest.fixture
    def app(self) -> FastAPI:
        with patch("civicos.main.get_settings", return_value=_settings()):
            return create_app()

    def test_app_is_created(self, app: FastAPI) -> None:
        assert app.title == "CivicOS API"

    def test_routes_mounted_under_api_prefix(self, app: FastAPI) -> None:
        paths = {route.path for route in app.routes}

        assert "/api/health" in paths
        assert "/api/politicians/ingest" in paths
        assert "/api/elections/districts/list" in paths
        assert "/api/legal/criminal-code" in paths
        assert "/api/social/messages/{message_id}/read" in paths

    def test_health_through_middleware(self, app: FastAPI) -> None:
        client = TestClient(app)
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.json()["data"] == {"status": "healthy"}


class TestExceptionHandlers:
    """Every error renders as the failure envelope."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/value")
        async def value() -> None:
            raise ValueError("Search query is required")

        @app.get("/politician")
        async def politician() -> None:
            raise PoliticianNotFoundError("Politician not found")

        @app.get("/friend")
        async def friend() -> None:
            raise FriendNotFoundError("Friendship not found")

        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("database exploded")

        @app.get("/validated")
        async def validated(limit: int = Query(ge=1)) -> dict:
            return {"limit": limit}

        return TestClient(app, raise_server_exceptions=False)

    def test_value_error_is_400(self, client: TestClient) -> None:
        response = client.get("/value")

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required"

    def test_lookup_errors_are_404(self, client: TestClient) -> None:
        assert client.get("/politician").status_code == 404
        assert client.get("/friend").json()["message"] == "Friendship not found"

    def test_unhandled_error_is_generic_500(self, client: TestClient) -> None:
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
        assert "exploded" not in response.text

    def test_validation_error_is_400(self, client: TestClient) -> None:
        response = client.get("/validated", params={"limit": 0})

        assert response.status_code == 400
        assert response.json()["message"].startswith("limit:")

    def test_unknown_route_is_enveloped(self, client: TestClient) -> None:
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestAppLifespan:
    """Tests for lifespan management."""

    async def test_lifespan_init_and_dispose(self) -> None:
        with (
            patch("civicos.main.get_settings", return_value=_settings()),
            patch("civicos.main.setup_logging") as mock_setup_logging,
            patch("civicos.main.init_engine") as mock_init_engine,
            patch("civicos.main.dispose_engine", new_callable=AsyncMock) as mock_dispose,
        ):
            async with lifespan(AsyncMock()):
                mock_setup_logging.assert_called_once()
                mock_init_engine.assert_called_once()

            mock_dispose.assert_awaited_once()

    async def test_refresh_loop_started_and_stopped(self) -> None:
        settings = _settings(ingestion_refresh_enabled=True, ingestion_refresh_interval=3600)
        with (
            patch("civicos.main.get_settings", return_value=settings),
            patch("civicos.main.setup_logging"),
            patch("civicos.main.init_engine"),
            patch("civicos.main.dispose_engine", new_callable=AsyncMock) as mock_dispose,
        ):
            async with lifespan(AsyncMock()):
                pass

            mock_dispose.assert_awaited_once()

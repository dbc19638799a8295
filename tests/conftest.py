"""Shared test fixtures: database, sessions, users, tokens, HTTP fetchers and the API client."""

import uuid
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

import civicos.models  # noqa: F401
from civicos.api.v1.auth import router as auth_router
from civicos.api.v1.elections import elections_router
from civicos.api.v1.friends import friends_router
from civicos.api.v1.legal import legal_router
from civicos.api.v1.politicians import politicians_router
from civicos.api.v1.social import social_router
from civicos.core.config import Settings, get_settings
from civicos.core.dependencies import (
    get_async_session,
    get_fetcher,
    get_fetcher_factory,
    get_ingestion_session_factory,
)
from civicos.core.security import PERMISSION_DATA_MANAGE, create_access_token, hash_password
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.main import register_exception_handlers
from civicos.models.base import Base
from civicos.models.user import User

TEST_SECRET = "test-secret-key-not-for-production"


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET,
        jwt_algorithm="HS256",
        jwt_access_token_expire_minutes=30,
        scraper_retries=0,
        scraper_retry_delay=0,
    )


@pytest.fixture
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """File-backed async SQLite engine, so concurrent sessions use separate connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'civicos.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Per-test async session."""
    async with session_factory() as session:
        yield session


async def _add_user(session: AsyncSession, username: str, role: str, permissions: list[str]) -> User:
    user = User(
        id=uuid.uuid4(),
        username=username,
        email=f"{username}@test.ca",
        hashed_password=hash_password("testpassword123"),
        role=role,
        permissions=permissions,
        display_name=username.title(),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def citizen_user(async_session: AsyncSession) -> User:
    """A citizen with no extra permissions."""
    return await _add_user(async_session, "citizen", "citizen", [])


@pytest.fixture
async def other_user(async_session: AsyncSession) -> User:
    """A second citizen for social tests."""
    return await _add_user(async_session, "neighbour", "citizen", [])


@pytest.fixture
async def data_manager(async_session: AsyncSession) -> User:
    """A moderator granted the data-management permission."""
    return await _add_user(async_session, "datamanager", "moderator", [PERMISSION_DATA_MANAGE])


def token_for(user: User, permissions: list[str] | None = None) -> str:
    """Sign an access token for a user with the test secret."""
    return create_access_token(
        subject=user.username,
        user_id=user.id,
        role=user.role,
        secret_key=TEST_SECRET,
        permissions=permissions if permissions is not None else list(user.permissions),
    )


@pytest.fixture
def make_fetcher() -> Callable[..., HtmlFetcher]:
    """Factory for fetchers backed by ``httpx.MockTransport``.

    ``routes`` maps a URL to a canned response, copied per request so a
    source can be fetched repeatedly; unknown URLs answer 503.
    """

    def factory(routes: dict[str, httpx.Response] | None = None) -> HtmlFetcher:
        routes = routes or {}

        def handler(request: httpx.Request) -> httpx.Response:
            canned = routes.get(str(request.url))
            if canned is None:
                return httpx.Response(503)
            return httpx.Response(canned.status_code, content=canned.content, headers=canned.headers)

        return HtmlFetcher(retries=0, retry_delay=0, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
async def offline_fetcher(make_fetcher: Callable[..., HtmlFetcher]) -> AsyncGenerator[HtmlFetcher]:
    """A fetcher for which every source is down."""
    async with make_fetcher() as fetcher:
        yield fetcher


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Sign access tokens for test users."""
    return token_for


@pytest.fixture
def app(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    make_fetcher: Callable[..., HtmlFetcher],
) -> FastAPI:
    """Every router under /api wired to the per-test database, with every external source unreachable."""
    app = FastAPI()
    register_exception_handlers(app)
    for router in (auth_router, politicians_router, elections_router, legal_router, friends_router, social_router):
        app.include_router(router, prefix="/api")

    async def session_override() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def fetcher_override() -> AsyncGenerator[HtmlFetcher]:
        async with make_fetcher() as fetcher:
            yield fetcher

    app.dependency_overrides[get_async_session] = session_override
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_ingestion_session_factory] = lambda: session_factory
    app.dependency_overrides[get_fetcher] = fetcher_override
    app.dependency_overrides[get_fetcher_factory] = lambda: make_fetcher
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> Callable[..., dict[str, str]]:
    """Bearer headers for a user."""

    def build(user: User, permissions: list[str] | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user, permissions)}"}

    return build

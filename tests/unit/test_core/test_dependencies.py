"""Tests for FastAPI dependency injection module."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.core.config import Settings
from civicos.core.dependencies import (
    get_current_claims,
    get_current_user,
    get_fetcher_factory,
    require_permission,
)
from civicos.core.security import PERMISSION_DATA_MANAGE, TokenClaims
from civicos.lib.scraper.fetcher import HtmlFetcher
from civicos.models.user import User


def _claims(role: str = "citizen", permissions: list[str] | None = None, uid: uuid.UUID | None = None) -> TokenClaims:
    return TokenClaims(
        sub="someone",
        uid=uid or uuid.uuid4(),
        role=role,
        permissions=permissions or [],
        exp=datetime.now(UTC) + timedelta(minutes=5),
    )


class TestGetCurrentClaims:
    """Tests for bearer token decoding."""

    async def test_valid_token(self, settings: Settings, citizen_user: User, make_token) -> None:
        claims = await get_current_claims(token=make_token(citizen_user), settings=settings)
        assert claims.uid == citizen_user.id

    async def test_invalid_token_raises_401(self, settings: Settings) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_claims(token="not-a-jwt", settings=settings)
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


class TestGetCurrentUser:
    """Tests for resolving the user named by the token."""

    async def test_returns_active_user(self, async_session: AsyncSession, citizen_user: User) -> None:
        user = await get_current_user(claims=_claims(uid=citizen_user.id), session=async_session)
        assert user.id == citizen_user.id

    async def test_unknown_user_raises_401(self, async_session: AsyncSession) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(claims=_claims(), session=async_session)
        assert exc_info.value.status_code == 401

    async def test_inactive_user_raises_401(self, async_session: AsyncSession, citizen_user: User) -> None:
        citizen_user.is_active = False
        await async_session.commit()

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(claims=_claims(uid=citizen_user.id), session=async_session)
        assert exc_info.value.status_code == 401


class TestRequirePermission:
    """Tests for require_permission factory."""

    async def test_granted_permission_passes(self) -> None:
        checker = require_permission(PERMISSION_DATA_MANAGE)
        claims = _claims("moderator", [PERMISSION_DATA_MANAGE])

        assert await checker(claims=claims) is claims

    async def test_admin_passes(self) -> None:
        checker = require_permission(PERMISSION_DATA_MANAGE)
        claims = _claims("admin")

        assert await checker(claims=claims) is claims

    async def test_missing_permission_raises_403(self) -> None:
        checker = require_permission(PERMISSION_DATA_MANAGE)

        with pytest.raises(HTTPException) as exc_info:
            await checker(claims=_claims("citizen"))
        assert exc_info.value.status_code == 403
        assert PERMISSION_DATA_MANAGE in str(exc_info.value.detail)


class TestGetFetcherFactory:
    async def test_builds_configured_fetchers(self, settings: Settings) -> None:
        factory = get_fetcher_factory(settings)
        fetcher = factory()
        try:
            assert isinstance(fetcher, HtmlFetcher)
        finally:
            await fetcher.close()

"""FastAPI dependency injection for database sessions, fetchers, auth and access control.

Provides get_async_session, get_current_claims, get_current_user and the
permission-based access control factory.
"""

from collections.abc import AsyncGenerator, Callable
from functools import partial
from typing import Annotated, Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from civicos.core.config import Settings, get_settings
from civicos.core.database import get_session_factory
from civicos.core.security import TokenClaims, decode_access_token
from civicos.lib.scraper.fetcher import HtmlFetcher, fetcher_from_settings
from civicos.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_ingestion_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for ingestion runs that open one session per branch."""
    return get_session_factory()


async def get_fetcher(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncGenerator[HtmlFetcher]:
    """Yield an HTTP fetcher configured from settings, closed after the request."""
    async with fetcher_from_settings(settings) as fetcher:
        yield fetcher


def get_fetcher_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> Callable[[], HtmlFetcher]:
    """Zero-argument fetcher constructor for endpoints that only fetch on demand."""
    return partial(fetcher_from_settings, settings)


async def get_current_claims(
    token: Annotated[str, Depends(oauth2_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenClaims:
    """Decode and validate the bearer token once per request.

    A missing token is rejected by ``oauth2_scheme`` with 401
    "Not authenticated".

    Raises:
        HTTPException: 401 if the token is invalid, expired or not an access token.
    """
    try:
        return decode_access_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    except jwt.InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


async def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> User:
    """Return the active user named by the token claims.

    Raises:
        HTTPException: 401 if the user no longer exists or is inactive.
    """
    result = await session.execute(select(User).where(User.id == claims.uid))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_permission(name: str) -> Callable[..., Any]:
    """Factory that creates a dependency requiring a permission claim.

    Args:
        name: Permission name (e.g., "admin.data.manage"). The admin role
            holds every permission.

    Returns:
        A FastAPI dependency returning the caller's claims.
    """

    async def permission_checker(
        claims: Annotated[TokenClaims, Depends(get_current_claims)],
    ) -> TokenClaims:
        if not claims.has_permission(name):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission '{name}' is required",
            )
        return claims

    return permission_checker

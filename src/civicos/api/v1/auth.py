"""Authentication API endpoints.

GET /health, POST /auth/register, POST /auth/login,
GET /auth/me, PATCH /auth/me.
"""

import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.core.config import Settings, get_settings
from civicos.core.dependencies import get_async_session, get_current_user
from civicos.models.user import User
from civicos.schemas.auth import ProfileUpdateRequest, RegisterRequest, TokenResponse, UserResponse
from civicos.schemas.common import ApiResponse, respond
from civicos.services import auth_service

router = APIRouter(tags=["auth"])


@router.get("/health", response_model=ApiResponse[dict])
async def health_check() -> ApiResponse:
    """Health check endpoint (no authentication required)."""
    started = time.perf_counter()
    return respond({"status": "healthy"}, started=started)


@router.post("/auth/register", response_model=ApiResponse[UserResponse], status_code=201)
async def register(
    request: RegisterRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Register a citizen account."""
    started = time.perf_counter()
    user = await auth_service.register_user(session, request)
    return respond(UserResponse.model_validate(user), started=started, message="Account created")


@router.post("/auth/login", response_model=ApiResponse[TokenResponse])
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse:
    """Authenticate with username and password and return an access token."""
    started = time.perf_counter()
    user = await auth_service.authenticate_user(session, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return respond(auth_service.generate_tokens(user, settings), started=started)


@router.get("/auth/me", response_model=ApiResponse[UserResponse])
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse:
    """Get the currently authenticated user's profile."""
    started = time.perf_counter()
    return respond(UserResponse.model_validate(current_user), started=started)


@router.patch("/auth/me", response_model=ApiResponse[UserResponse])
async def update_me(
    request: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ApiResponse:
    """Edit the caller's display name, bio, location or email."""
    started = time.perf_counter()
    user = await auth_service.update_profile(session, current_user, request.model_dump(exclude_unset=True))
    return respond(UserResponse.model_validate(user), started=started, message="Profile updated")

"""Account service: registration, login, access tokens and profile edits."""

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civicos.core.config import Settings
from civicos.core.security import create_access_token, hash_password, verify_password
from civicos.models.user import User
from civicos.schemas.auth import RegisterRequest, TokenResponse, UserCreateRequest

# Columns a user may change on their own account.
PROFILE_FIELDS: frozenset[str] = frozenset({"display_name", "bio", "location", "email"})


async def _insert_user(session: AsyncSession, user: User, password: str) -> User:
    clash = await session.execute(
        select(User.id).where(or_(User.username == user.username, User.email == user.email)).limit(1)
    )
    if clash.first() is not None:
        msg = "Username or email already exists"
        raise ValueError(msg)

    user.hashed_password = hash_password(password)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info("Created {} account {}", user.role, user.username)
    return user


async def register_user(session: AsyncSession, request: RegisterRequest) -> User:
    """Self-service signup. New accounts are always citizens without permissions.

    Raises:
        ValueError: If the username or email is taken.
    """
    user = User(
        username=request.username,
        email=request.email,
        role="citizen",
        permissions=[],
        display_name=request.display_name,
        location=request.location,
    )
    return await _insert_user(session, user, request.password)


async def create_user(session: AsyncSession, request: UserCreateRequest) -> User:
    """Create an account with an explicit role and permission grants (CLI only).

    Args:
        session: Database session.
        request: Validated creation request; permissions are already checked
            against the known permission names.

    Returns:
        The stored user.

    Raises:
        ValueError: If the username or email is taken.
    """
    user = User(
        username=request.username,
        email=request.email,
        role=request.role,
        permissions=list(request.permissions),
        display_name=request.display_name,
    )
    return await _insert_user(session, user, request.password)


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User | None:
    """Check a username/password pair and stamp the login time.

    Returns:
        The user, or None for unknown names, wrong passwords and deactivated accounts.
    """
    user = (await session.execute(select(User).where(User.username == username))).scalar_one_or_none()
    if user is None or not user.is_active or not verify_password(password, user.hashed_password):
        return None
    user.last_login_at = datetime.now(UTC)
    await session.commit()
    return user


def generate_tokens(user: User, settings: Settings) -> TokenResponse:
    """Sign an access token whose claims carry the user's role and permissions."""
    token = create_access_token(
        subject=user.username,
        user_id=user.id,
        role=user.role,
        secret_key=settings.jwt_secret_key,
        permissions=list(user.permissions or []),
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_access_token_expire_minutes,
    )
    return TokenResponse(access_token=token, expires_in=settings.jwt_access_token_expire_minutes * 60)


async def list_users(session: AsyncSession, page: int = 1, page_size: int = 20) -> tuple[list[User], int]:
    """One page of accounts in signup order, with the total account count."""
    total = (await session.execute(select(func.count(User.id)))).scalar_one()
    result = await session.execute(
        select(User).order_by(User.created_at, User.username).offset((page - 1) * page_size).limit(page_size)
    )
    return list(result.scalars().all()), total


async def update_profile(session: AsyncSession, user: User, updates: dict) -> User:
    """Apply profile edits; keys outside the editable profile columns are dropped.

    Raises:
        ValueError: If the new email belongs to another account.
    """
    email = updates.get("email")
    if email is not None and email != user.email:
        taken = await session.execute(select(User.id).where(User.email == email))
        if taken.first() is not None:
            msg = "Email already in use"
            raise ValueError(msg)

    for field in PROFILE_FIELDS & updates.keys():
        setattr(user, field, updates[field])

    await session.commit()
    await session.refresh(user)
    return user

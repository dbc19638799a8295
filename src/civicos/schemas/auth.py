"""Authentication and user Pydantic v2 schemas.

Defines request/response schemas for registration, login, profile edits
and user management.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from civicos.core.security import KNOWN_PERMISSIONS
from civicos.schemas.common import CamelModel

ROLE_PATTERN = "^(citizen|moderator|admin)$"


class RegisterRequest(CamelModel):
    """Self-service account registration."""

    username: str = Field(min_length=3, max_length=100, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(min_length=8)
    display_name: str | None = Field(default=None, max_length=150)
    location: str | None = Field(default=None, max_length=200)


class LoginRequest(BaseModel):
    """Login request with username and password."""

    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=8)


class TokenResponse(CamelModel):
    """JWT access token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token expiration in seconds")


class UserCreateRequest(BaseModel):
    """Administrative user creation with an explicit role and permissions."""

    username: str = Field(min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)
    role: str = Field(default="citizen", pattern=ROLE_PATTERN)
    permissions: list[str] = Field(default_factory=list)
    display_name: str | None = None

    @field_validator("permissions")
    @classmethod
    def _known_permissions(cls, value: list[str]) -> list[str]:
        unknown = sorted(set(value) - KNOWN_PERMISSIONS)
        if unknown:
            msg = f"Unknown permissions: {', '.join(unknown)}"
            raise ValueError(msg)
        return sorted(set(value))


class ProfileUpdateRequest(CamelModel):
    """Partial profile update (all fields optional)."""

    display_name: str | None = Field(default=None, max_length=150)
    bio: str | None = None
    location: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None


class UserResponse(CamelModel):
    """The authenticated user's own account."""

    id: UUID
    username: str
    email: str
    role: str
    permissions: list[str] = Field(default_factory=list)
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    is_active: bool
    created_at: datetime
    last_login_at: datetime | None = None


class PublicUserResponse(CamelModel):
    """What other users may see about an account."""

    id: UUID
    username: str
    display_name: str | None = None
    location: str | None = None

"""JWT token creation/validation and password hashing.

Uses PyJWT for JWT operations and passlib with bcrypt for password hashing.
Access tokens carry the caller's role and permission names so route
guards can authorize without a database round trip.
"""

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from passlib.context import CryptContext
from pydantic import BaseModel, Field

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PERMISSION_DATA_MANAGE = "admin.data.manage"
PERMISSION_CONTENT_MODERATE = "admin.content.moderate"
KNOWN_PERMISSIONS: frozenset[str] = frozenset({PERMISSION_DATA_MANAGE, PERMISSION_CONTENT_MODERATE})

ROLE_ADMIN = "admin"


class TokenClaims(BaseModel):
    """Decoded access-token claims, validated once per request."""

    sub: str = Field(min_length=1, description="Username")
    uid: uuid.UUID = Field(description="User id")
    role: str
    permissions: list[str] = Field(default_factory=list)
    exp: datetime
    type: str = "access"

    def has_permission(self, name: str) -> bool:
        """Return True when the claims grant ``name``; admins hold every permission."""
        return self.role == ROLE_ADMIN or name in self.permissions


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt.

    Args:
        password: The plaintext password to hash.

    Returns:
        The bcrypt-hashed password string.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a bcrypt hash.

    Args:
        plain_password: The plaintext password to verify.
        hashed_password: The bcrypt hash to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str,
    user_id: uuid.UUID,
    role: str,
    secret_key: str,
    *,
    permissions: list[str] | None = None,
    algorithm: str = "HS256",
    expires_minutes: int = 60,
) -> str:
    """Create a signed JWT access token.

    Args:
        subject: The token subject (the username).
        user_id: The user's id.
        role: The user's role.
        secret_key: Secret key for signing.
        permissions: Permission names granted to the user.
        algorithm: JWT signing algorithm.
        expires_minutes: Token expiration in minutes.

    Returns:
        The encoded JWT string.
    """
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": subject,
        "uid": str(user_id),
        "role": role,
        "permissions": sorted(permissions or []),
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> TokenClaims:
    """Decode a JWT and validate it as an access token.

    Args:
        token: The JWT string to decode.
        secret_key: Secret key used for signing.
        algorithm: JWT signing algorithm.

    Returns:
        The typed token claims.

    Raises:
        jwt.InvalidTokenError: If the signature, expiry or claim set is invalid.
    """
    payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    if payload.get("type") != "access":
        msg = "Token is not an access token"
        raise jwt.InvalidTokenError(msg)
    try:
        return TokenClaims.model_validate(payload)
    except ValueError as e:
        msg = "Malformed token claims"
        raise jwt.InvalidTokenError(msg) from e

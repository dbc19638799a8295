"""Unit tests for JWT tokens and password hashing."""

import uuid
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from civicos.core.security import (
    PERMISSION_DATA_MANAGE,
    TokenClaims,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "test-secret-key-that-is-at-least-32-characters-long"


class TestPasswordHashing:
    """Tests for bcrypt password hashing."""

    def test_hash_and_verify(self) -> None:
        hashed = hash_password("correct horse battery staple")
        assert hashed != "correct horse battery staple"
        assert verify_password("correct horse battery staple", hashed)

    def test_wrong_password_rejected(self) -> None:
        assert not verify_password("wrong", hash_password("right-password"))


class TestAccessTokens:
    """Tests for access token creation and validation."""

    def test_round_trip_claims(self) -> None:
        user_id = uuid.uuid4()
        token = create_access_token(
            "citizen", user_id, "moderator", SECRET, permissions=[PERMISSION_DATA_MANAGE, "a.b"]
        )
        claims = decode_access_token(token, SECRET)

        assert claims.sub == "citizen"
        assert claims.uid == user_id
        assert claims.role == "moderator"
        assert claims.permissions == ["a.b", PERMISSION_DATA_MANAGE]
        assert claims.type == "access"

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token("citizen", uuid.uuid4(), "citizen", SECRET)
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(token, "another-secret-key-that-is-32-characters")

    def test_expired_token_rejected(self) -> None:
        token = create_access_token("citizen", uuid.uuid4(), "citizen", SECRET, expires_minutes=-1)
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token, SECRET)

    def test_non_access_token_rejected(self) -> None:
        payload = {
            "sub": "citizen",
            "uid": str(uuid.uuid4()),
            "role": "citizen",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
            "type": "refresh",
        }
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        with pytest.raises(jwt.InvalidTokenError, match="not an access token"):
            decode_access_token(token, SECRET)

    def test_malformed_claims_rejected(self) -> None:
        payload = {
            "sub": "citizen",
            "uid": "not-a-uuid",
            "role": "citizen",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
            "type": "access",
        }
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        with pytest.raises(jwt.InvalidTokenError, match="Malformed"):
            decode_access_token(token, SECRET)


class TestTokenClaims:
    def _claims(self, role: str, permissions: list[str]) -> TokenClaims:
        return TokenClaims(
            sub="someone",
            uid=uuid.uuid4(),
            role=role,
            permissions=permissions,
            exp=datetime.now(UTC) + timedelta(minutes=5),
        )

    def test_named_permission(self) -> None:
        assert self._claims("moderator", [PERMISSION_DATA_MANAGE]).has_permission(PERMISSION_DATA_MANAGE)
        assert not self._claims("citizen", []).has_permission(PERMISSION_DATA_MANAGE)

    def test_admin_holds_every_permission(self) -> None:
        assert self._claims("admin", []).has_permission(PERMISSION_DATA_MANAGE)

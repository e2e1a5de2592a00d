"""Tests for auth security functions."""

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi import HTTPException
from jose import JWTError, jwt

from src.auth.dependencies import get_current_user, get_token_from_header
from src.auth.security import create_access_token, decode_access_token
from src.config import get_settings


class TestAccessToken:
    """Tests for access token creation and decoding."""

    def test_create_access_token(self) -> None:
        """Should create valid access token."""
        token = create_access_token({"sub": str(uuid4())})
        assert token is not None
        assert len(token) > 0

    def test_decode_access_token(self) -> None:
        """Should decode token and return payload."""
        user_id = uuid4()
        email = "test@example.com"

        token = create_access_token({"sub": str(user_id), "email": email})
        payload = decode_access_token(token)

        assert payload["sub"] == str(user_id)
        assert payload["email"] == email
        assert payload["type"] == "access"
        assert "exp" in payload
        assert "iat" in payload
        assert "jti" in payload

    def test_decode_access_token_expired(self) -> None:
        """Should raise JWTError for expired token."""
        token = create_access_token(
            {"sub": str(uuid4())}, expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_decode_access_token_invalid(self) -> None:
        """Should raise JWTError for invalid token."""
        with pytest.raises(JWTError):
            decode_access_token("invalid.token.here")

    def test_decode_access_token_wrong_type(self) -> None:
        """Should raise JWTError if token type is not 'access'."""
        settings = get_settings()
        token = jwt.encode(
            {"sub": str(uuid4()), "type": "refresh"},
            settings.auth_secret_key,
            algorithm=settings.auth_algorithm,
        )

        with pytest.raises(JWTError, match="expected 'access'"):
            decode_access_token(token)

    def test_decode_access_token_without_subject(self) -> None:
        """Tokens must name a user."""
        token = create_access_token({"email": "nobody@example.com"})

        with pytest.raises(JWTError, match="no subject"):
            decode_access_token(token)

    def test_tokens_unique(self) -> None:
        """Same claims still yield distinct tokens (jti)."""
        data = {"sub": str(uuid4())}
        assert create_access_token(data) != create_access_token(data)


class TestCurrentUser:
    """Tests for the current-user dependency."""

    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        """Subject becomes the user id."""
        user_id = uuid4()
        token = create_access_token({"sub": str(user_id), "email": "a@b.co"})

        user = await get_current_user(token)

        assert user.id == user_id
        assert user.email == "a@b.co"

    @pytest.mark.asyncio
    async def test_missing_token(self) -> None:
        """No token is 401."""
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_non_uuid_subject(self) -> None:
        """Subject must be a UUID."""
        token = create_access_token({"sub": "not-a-uuid"})

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(token)
        assert exc_info.value.status_code == 401


class TestTokenFromHeader:
    """Tests for Bearer header parsing."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("Basic abc", None),
            ("Bearer", None),
        ],
    )
    def test_parsing(self, header: str, expected: str | None) -> None:
        """Only well-formed Bearer headers yield a token."""
        request = type("FakeRequest", (), {"headers": {"Authorization": header}})()
        assert get_token_from_header(request) == expected

"""JWT helpers for request authentication.

Tokens are issued by the identity service; this API only validates access
tokens. ``create_access_token`` exists for local tooling and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt

from src.config.settings import get_settings


DEFAULT_ACCESS_TOKEN_TTL = timedelta(minutes=15)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token.

    Args:
        data: Claims to encode (must include "sub")
        expires_delta: Token lifetime, 15 minutes by default

    Returns:
        Encoded JWT string
    """
    settings = get_settings()
    now = datetime.now(UTC)

    payload = {
        **data,
        "type": "access",
        "iat": now,
        "exp": now + (expires_delta or DEFAULT_ACCESS_TOKEN_TTL),
        "jti": str(uuid4()),
    }

    return jwt.encode(
        payload,
        settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate an access token.

    Validates:
    - JWT signature
    - Expiration time
    - Token type == "access"
    - Presence of the "sub" claim

    Raises:
        JWTError: If token is invalid, expired, or wrong type
    """
    settings = get_settings()

    payload = jwt.decode(
        token,
        settings.auth_secret_key,
        algorithms=[settings.auth_algorithm],
    )

    if payload.get("type") != "access":
        msg = "Invalid token type: expected 'access'"
        raise JWTError(msg)

    if not payload.get("sub"):
        msg = "Token has no subject"
        raise JWTError(msg)

    return payload

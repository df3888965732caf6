"""Password hashing and JWT access token helpers."""
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from core.config import Settings
from models.base import is_valid_id
from services.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# Argon2 with pwdlib's recommended parameters
password_hasher = PasswordHash.recommended()

# Verified against when the email is unknown so signin timing is uniform
_DUMMY_PASSWORD_HASH = password_hasher.hash("not-a-real-password")


def hash_password(password: str) -> str:
    """Derive a salted Argon2 hash suitable for storage."""
    return password_hasher.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Check a plaintext password against a stored hash.

    Passing `None` runs a verification against a throwaway hash and always
    returns False, so callers can keep timing the same for unknown accounts.
    """
    if password_hash is None:
        password_hasher.verify(password, _DUMMY_PASSWORD_HASH)
        return False
    try:
        return password_hasher.verify(password, password_hash)
    except UnknownHashError:
        return False


def create_access_token(
    user_id: int,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Issue a signed access token for a user.

    The `sub` claim carries the user ID as a string (required by RFC 7519).
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and validate an access token.

    Raises:
        UnauthorizedError: If the token is expired, has a bad signature, or is malformed.
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.PyJWTError as e:
        # Full reason stays server-side
        logger.debug("JWT validation failed: %s", e)
        raise UnauthorizedError("Invalid token")


def get_token_user_id(payload: dict[str, Any]) -> int:
    """Extract the user ID from a decoded token's `sub` claim."""
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("Invalid token: malformed sub claim")
    if not is_valid_id(user_id):
        raise UnauthorizedError("Invalid token: malformed sub claim")
    return user_id

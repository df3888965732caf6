"""Authentication dependency that verifies bearer tokens and resolves the current user."""
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.security import decode_access_token, get_token_user_id
from db.session import get_async_session
from models.user import User
from services import user_service
from services.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme. auto_error=False so a missing header surfaces as our
# own 401 body instead of FastAPI's 403.
security = HTTPBearer(auto_error=False)


async def resolve_token_user(db: AsyncSession, token: str, settings: Settings) -> User:
    """
    Validate an access token and load the user it was issued for.

    Raises:
        UnauthorizedError: If the token is invalid or expired, or its user no longer exists.
    """
    payload = decode_access_token(token, settings)
    user_id = get_token_user_id(payload)

    user = await user_service.get_user_by_id(db, user_id)
    if user is None:
        # Reported as 401 rather than 404 so tokens cannot reveal which accounts exist
        logger.debug("Token subject %s no longer exists", user_id)
        raise UnauthorizedError("Invalid token")
    return user


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency that validates the bearer token and returns the current user.

    The resolved user ID is also stored on `request.state.user_id`.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    try:
        user = await resolve_token_user(db, credentials.credentials, settings)
    except UnauthorizedError as e:
        logger.debug("Rejected token on %s %s: %s", request.method, request.url.path, e.message)
        raise

    request.state.user_id = user.id
    return user

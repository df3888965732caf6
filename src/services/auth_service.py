"""Service layer for account signup and signin."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from core.config import Settings
from core.security import create_access_token, hash_password, verify_password
from models.user import User
from schemas.auth import AuthCredentials
from services import user_service
from services.exceptions import ConflictError, UnauthorizedError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


async def signup(db: AsyncSession, credentials: AuthCredentials) -> User:
    """
    Register a new account.

    Hashing runs in a worker thread since Argon2 is deliberately slow.

    Raises:
        ConflictError: If the email is already registered.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    if await user_service.email_taken(db, credentials.email):
        raise ConflictError("Email already registered")

    password_hash = await run_in_threadpool(hash_password, credentials.password)
    user = User(email=credentials.email, password_hash=password_hash)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        raise ConflictError("Email already registered")
    await db.refresh(user)

    logger.info("Created user %s", user.id)
    return user


async def signin(
    db: AsyncSession,
    credentials: AuthCredentials,
    settings: Settings,
) -> str:
    """
    Verify credentials and issue an access token.

    Unknown emails and wrong passwords fail identically.

    Raises:
        UnauthorizedError: If the credentials do not match an account.
    """
    user = await user_service.get_user_by_email(db, credentials.email)
    password_hash = user.password_hash if user is not None else None

    if not await run_in_threadpool(verify_password, credentials.password, password_hash):
        if user is not None:
            logger.info("Failed signin for user %s", user.id)
        raise UnauthorizedError(INVALID_CREDENTIALS)

    logger.info("User %s signed in", user.id)
    return create_access_token(user.id, settings)

"""Service layer for user lookup and profile edits."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserUpdate
from services.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by primary key."""
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by (already normalized) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def email_taken(
    db: AsyncSession,
    email: str,
    exclude_user_id: int | None = None,
) -> bool:
    """Return True if another account already uses this email."""
    query = select(User.id).where(User.email == email)
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


async def update_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """
    Apply partial profile fields to a user.

    Raises:
        ValidationError: If email is explicitly set to null.
        ConflictError: If the new email belongs to another account.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    update_data = data.model_dump(exclude_unset=True)

    if "email" in update_data:
        new_email = update_data["email"]
        if new_email is None:
            raise ValidationError("email cannot be null")
        if new_email != user.email and await email_taken(db, new_email, exclude_user_id=user.id):
            raise ConflictError("Email already registered")

    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        await db.flush()
    except IntegrityError:
        raise ConflictError("Email already registered")
    await db.refresh(user)

    if update_data:
        logger.info("Updated user %s fields: %s", user.id, sorted(update_data))
    return user

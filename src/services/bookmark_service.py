"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import is_valid_id
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Fields that are NOT NULL in the table and so cannot be cleared via PATCH
REQUIRED_FIELDS = ("title", "link")


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark for a user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        link=str(data.link),
        description=data.description,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.debug("User %s created bookmark %s", user_id, bookmark.id)
    return bookmark


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark:
    """
    Get a bookmark by ID, scoped to user.

    Raises:
        NotFoundError: If the bookmark does not exist or belongs to another user.
    """
    if not is_valid_id(bookmark_id):
        # No row can carry this ID; skip the query so the driver does not overflow
        raise NotFoundError("Bookmark not found")
    result = await db.execute(
        select(Bookmark).where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    bookmark = result.scalar_one_or_none()
    if bookmark is None:
        raise NotFoundError("Bookmark not found")
    return bookmark


async def list_bookmarks(
    db: AsyncSession,
    user_id: int,
    offset: int = 0,
    limit: int = 50,
) -> tuple[list[Bookmark], int]:
    """Get a page of a user's bookmarks, newest first, plus the user's total count."""
    total_result = await db.execute(
        select(func.count()).select_from(Bookmark).where(Bookmark.user_id == user_id),
    )
    total = total_result.scalar_one()

    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .offset(offset)
        .limit(limit),
    )
    return list(result.scalars().all()), total


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Update a bookmark with the fields present in the request.

    Raises:
        NotFoundError: If the bookmark does not exist or belongs to another user.
        ValidationError: If a required field is explicitly set to null.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)

    update_data = data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in update_data and update_data[field] is None:
            raise ValidationError(f"{field} cannot be null")
    if "link" in update_data:
        update_data["link"] = str(update_data["link"])

    for field, value in update_data.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> None:
    """
    Delete a bookmark.

    Raises:
        NotFoundError: If the bookmark does not exist or belongs to another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    await db.delete(bookmark)
    await db.flush()
    logger.debug("User %s deleted bookmark %s", user_id, bookmark_id)

"""Tests for bookmark service layer."""
from collections.abc import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.user import User
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services import bookmark_service
from services.exceptions import NotFoundError, ValidationError


async def test__create_bookmark__stores_normalized_link(
    db_session: AsyncSession,
    user_a: User,
) -> None:
    bookmark = await bookmark_service.create_bookmark(
        db_session,
        user_a.id,
        BookmarkCreate(title="Python", link="https://python.org", description="Docs"),
    )

    assert bookmark.id is not None
    assert bookmark.user_id == user_a.id
    assert bookmark.link == "https://python.org/"
    assert bookmark.description == "Docs"


async def test__get_bookmark__scoped_to_owner(
    db_session: AsyncSession,
    user_a: User,
    user_b: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    bookmark = await create_bookmark(user_a)

    found = await bookmark_service.get_bookmark(db_session, user_a.id, bookmark.id)
    assert found.id == bookmark.id

    with pytest.raises(NotFoundError, match="Bookmark not found"):
        await bookmark_service.get_bookmark(db_session, user_b.id, bookmark.id)


async def test__get_bookmark__missing_id(
    db_session: AsyncSession,
    user_a: User,
) -> None:
    with pytest.raises(NotFoundError):
        await bookmark_service.get_bookmark(db_session, user_a.id, 9999)


async def test__list_bookmarks__newest_first_with_total(
    db_session: AsyncSession,
    user_a: User,
    user_b: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    first = await create_bookmark(user_a, title="first")
    second = await create_bookmark(user_a, title="second")
    third = await create_bookmark(user_a, title="third")
    await create_bookmark(user_b, title="not mine")

    items, total = await bookmark_service.list_bookmarks(db_session, user_a.id)

    assert total == 3
    assert [b.id for b in items] == [third.id, second.id, first.id]


async def test__list_bookmarks__paginates(
    db_session: AsyncSession,
    user_a: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    for i in range(5):
        await create_bookmark(user_a, title=f"bookmark {i}")

    page, total = await bookmark_service.list_bookmarks(db_session, user_a.id, offset=3, limit=2)

    assert total == 5
    assert len(page) == 2


async def test__update_bookmark__partial_update(
    db_session: AsyncSession,
    user_a: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    bookmark = await create_bookmark(user_a, title="Old", description="keep me")

    updated = await bookmark_service.update_bookmark(
        db_session, user_a.id, bookmark.id, BookmarkUpdate(title="New"),
    )

    assert updated.title == "New"
    assert updated.description == "keep me"
    assert updated.link == "https://example.com/"


async def test__update_bookmark__converts_link_to_string(
    db_session: AsyncSession,
    user_a: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    bookmark = await create_bookmark(user_a)

    updated = await bookmark_service.update_bookmark(
        db_session, user_a.id, bookmark.id, BookmarkUpdate(link="https://docs.python.org"),
    )

    assert updated.link == "https://docs.python.org/"


@pytest.mark.parametrize("field", ["title", "link"])
async def test__update_bookmark__required_field_cannot_be_null(
    db_session: AsyncSession,
    user_a: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
    field: str,
) -> None:
    bookmark = await create_bookmark(user_a)

    with pytest.raises(ValidationError, match=f"{field} cannot be null"):
        await bookmark_service.update_bookmark(
            db_session, user_a.id, bookmark.id, BookmarkUpdate.model_validate({field: None}),
        )


async def test__update_bookmark__other_users_bookmark_not_found(
    db_session: AsyncSession,
    user_a: User,
    user_b: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    bookmark = await create_bookmark(user_a, title="Original")

    with pytest.raises(NotFoundError):
        await bookmark_service.update_bookmark(
            db_session, user_b.id, bookmark.id, BookmarkUpdate(title="Hacked"),
        )

    await db_session.refresh(bookmark)
    assert bookmark.title == "Original"


async def test__delete_bookmark__removes_row(
    db_session: AsyncSession,
    user_a: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    bookmark = await create_bookmark(user_a)

    await bookmark_service.delete_bookmark(db_session, user_a.id, bookmark.id)

    assert await db_session.get(Bookmark, bookmark.id) is None


async def test__delete_bookmark__other_users_bookmark_not_found(
    db_session: AsyncSession,
    user_a: User,
    user_b: User,
    create_bookmark: Callable[..., Awaitable[Bookmark]],
) -> None:
    bookmark = await create_bookmark(user_a)

    with pytest.raises(NotFoundError):
        await bookmark_service.delete_bookmark(db_session, user_b.id, bookmark.id)

    assert await db_session.get(Bookmark, bookmark.id) is not None


@pytest.mark.parametrize("bookmark_id", [0, -1, 2_147_483_648, 10**20])
async def test__get_bookmark__out_of_range_id_not_found(
    db_session: AsyncSession,
    user_a: User,
    bookmark_id: int,
) -> None:
    with pytest.raises(NotFoundError, match="Bookmark not found"):
        await bookmark_service.get_bookmark(db_session, user_a.id, bookmark_id)

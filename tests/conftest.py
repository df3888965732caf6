"""
Pytest fixtures for testing.

Environment variables are set at import time because `db.session` builds its
engine from Settings when first imported.
"""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-characters-long"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.config import Settings, get_settings  # noqa: E402
from core.security import create_access_token, hash_password  # noqa: E402
from models.base import Base  # noqa: E402
from models.bookmark import Bookmark  # noqa: E402
from models.user import User  # noqa: E402

DEFAULT_PASSWORD = "pass123"


@pytest.fixture
def settings() -> Settings:
    """Fresh settings built from the test environment."""
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create an in-memory SQLite engine with the schema applied.

    StaticPool keeps a single connection so every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the per-test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    db_session: AsyncSession,
    settings: Settings,  # noqa: ARG001
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session override."""
    from api.main import app  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory fixture that inserts a user with a real password hash."""

    async def _create_user(
        email: str,
        password: str = DEFAULT_PASSWORD,
        **fields: str,
    ) -> User:
        user = User(email=email, password_hash=hash_password(password), **fields)
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def create_bookmark(db_session: AsyncSession) -> Callable[..., Awaitable[Bookmark]]:
    """Factory fixture that inserts a bookmark for a user."""

    async def _create_bookmark(
        user: User,
        title: str = "Example",
        link: str = "https://example.com/",
        description: str | None = None,
    ) -> Bookmark:
        bookmark = Bookmark(
            user_id=user.id,
            title=title,
            link=link,
            description=description,
        )
        db_session.add(bookmark)
        await db_session.flush()
        await db_session.refresh(bookmark)
        return bookmark

    return _create_bookmark


@pytest.fixture
async def user_a(create_user: Callable[..., Awaitable[User]]) -> User:
    """Create the first test user (User A)."""
    return await create_user("user-a@example.com")


@pytest.fixture
async def user_b(create_user: Callable[..., Awaitable[User]]) -> User:
    """Create a second test user (User B)."""
    return await create_user("user-b@example.com")


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[[User], dict[str, str]]:
    """Factory fixture producing Authorization headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id, settings)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers

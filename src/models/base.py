"""SQLAlchemy declarative base with common mixins."""
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at columns.

    All timestamps are timezone-aware (stored as TIMESTAMP WITH TIME ZONE in PostgreSQL).
    updated_at is refreshed by the database on every UPDATE issued through the ORM,
    so callers must refresh() after flush before reading it.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# Largest value an INTEGER primary key column can hold (PostgreSQL int4)
MAX_INTEGER_ID = 2_147_483_647


def is_valid_id(value: int) -> bool:
    """Return True if value fits an INTEGER primary key; larger values overflow the driver."""
    return 1 <= value <= MAX_INTEGER_ID

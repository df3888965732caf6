"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    title: str = Field(min_length=1, max_length=500)
    link: HttpUrl
    description: str | None = None


class BookmarkUpdate(BaseModel):
    """Schema for updating an existing bookmark. Unset fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    link: HttpUrl | None = None
    description: str | None = None


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    link: str
    description: str | None
    created_at: datetime
    updated_at: datetime


class BookmarkListResponse(BaseModel):
    """Paginated list of bookmarks."""

    items: list[BookmarkResponse]
    total: int
    offset: int
    limit: int
    has_more: bool

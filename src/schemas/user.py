"""Pydantic schemas for user profile endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from schemas.auth import normalize_email


class UserResponse(BaseModel):
    """Public account fields. The password hash is never part of this model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    """
    Schema for partial profile edits.

    Only fields present in the request body are applied. `email` may be changed
    but not cleared.
    """

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str | None) -> str | None:
        """Normalize email casing if provided."""
        if v is None:
            return None
        return normalize_email(v)

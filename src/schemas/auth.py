"""Pydantic schemas for signup and signin."""
from pydantic import BaseModel, EmailStr, Field, field_validator


def normalize_email(email: str) -> str:
    """Lowercase and trim an email so lookups and uniqueness are case-insensitive."""
    return email.strip().lower()


class AuthCredentials(BaseModel):
    """Email and password submitted to signup or signin."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=256)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        """Normalize email casing."""
        return normalize_email(v)


class AccessTokenResponse(BaseModel):
    """Response body for a successful signin."""

    access_token: str

"""
Error response schemas for API endpoints.

Provides structured error responses for OpenAPI documentation and consistent
error handling across the API.
"""
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every non-2xx response."""

    detail: str = Field(description="Human-readable error message")
    code: str = Field(description="Stable machine-readable error code, e.g. 'not_found'")


class ValidationErrorResponse(ErrorResponse):
    """Body returned when request validation fails (400)."""

    errors: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Per-field validation failures",
    )


UNAUTHORIZED_RESPONSE = {401: {"model": ErrorResponse, "description": "Missing or invalid token"}}
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Resource not found"}}
CONFLICT_RESPONSE = {409: {"model": ErrorResponse, "description": "Email already registered"}}
VALIDATION_RESPONSE = {400: {"model": ValidationErrorResponse, "description": "Invalid input"}}

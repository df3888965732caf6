"""Shared exceptions for service layer operations."""


class ServiceError(Exception):
    """
    Base class for errors that map onto an HTTP response.

    Subclasses set `status_code` and a stable machine-readable `code`; the API
    layer renders them as `{"detail": message, "code": code}`.
    """

    status_code: int = 500
    code: str = "internal_error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when input is malformed or missing required values."""

    status_code = 400
    code = "validation_error"


class UnauthorizedError(ServiceError):
    """Raised for bad credentials or an invalid, expired, or missing token."""

    status_code = 401
    code = "unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}  # noqa: RUF012


class ConflictError(ServiceError):
    """Raised when a write would violate a uniqueness constraint (e.g. email)."""

    status_code = 409
    code = "conflict"


class NotFoundError(ServiceError):
    """
    Raised when a resource does not exist or is not owned by the caller.

    Both cases are reported identically so resource IDs cannot be enumerated.
    """

    status_code = 404
    code = "not_found"

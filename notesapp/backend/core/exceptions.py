"""
Custom Exceptions.

One taxonomy for both sides of the wire: services raise these, the exception
handlers map them to HTTP statuses, and NotesAPIClient raises them again
from error responses so the TUI and the CLI catch the same classes.

Each class carries a stable error code that appears in the response body.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    code = "SYS_INTERNAL_ERROR"
    default_message = "Internal error"

    def __init__(self, message: str | None = None, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """A folder or note id that does not exist."""

    code = "RES_NOT_FOUND"
    default_message = "Resource not found"


class ValidationError(ApplicationError):
    """
    Input the server refuses: blank folder names, unknown folders,
    updates without fields.

    `details` is sent to the client, e.g. {"missing_fields": ["name"]}.
    """

    code = "VAL_VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class ExternalServiceError(ApplicationError):
    """
    The backend could not be reached or answered with an unexpected status.

    status_code is None when no response arrived at all.
    """

    code = "SYS_EXTERNAL_SERVICE_ERROR"
    default_message = "External service error"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DatabaseError(ApplicationError):
    """The database driver failed."""

    code = "SYS_DATABASE_ERROR"
    default_message = "Database error"

"""
Base Service.

Services sit between the endpoints and the repositories. They check input
the schemas cannot express (blank after trimming, folder must exist) and
turn driver failures into application errors so the API never leaks a
SQLAlchemy exception.
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.backend.core.exceptions import DatabaseError, ValidationError
from notesapp.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """Holds the request's session and a logger named after the subclass module."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _execute_db_operation(self, operation: str, coro: Awaitable[T]) -> T:
        """
        Await a repository call, translating database failures.

        Application errors raised inside (NotFoundError and friends) pass
        through unchanged.

        Raises:
            ValidationError: A constraint rejected the write (400)
            DatabaseError: Any other driver failure (500)
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Constraint violation",
                extra={"operation": operation, "error": str(e.orig)},
            )
            raise ValidationError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database failure",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def _validate_required(self, fields: dict[str, Any], field_names: list[str]) -> None:
        """
        Reject None and whitespace-only values.

        Every offending field is reported at once under
        details["missing_fields"], in the order given.

        Raises:
            ValidationError: If any field is missing or blank
        """
        missing = [
            name
            for name in field_names
            if fields.get(name) is None
            or (isinstance(fields[name], str) and not fields[name].strip())
        ]
        if missing:
            raise ValidationError("Required fields missing", details={"missing_fields": missing})

    def _log(self, level: str, message: str, context: dict[str, Any]) -> None:
        getattr(self._logger, level)(
            message,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Info-level record of a write about to happen."""
        self._log("info", operation, context)

    def _log_debug(self, message: str, **context: Any) -> None:
        self._log("debug", message, context)

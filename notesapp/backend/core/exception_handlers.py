"""
Exception Handlers.

Turn exceptions raised while serving folders and notes into the error
envelope the front ends parse:

    {"success": false, "error": {"code", "message", "details"}, "metadata": {...}}

Successful responses never use the envelope; they are the rows themselves.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notesapp.backend.core.config import get_app_config
from notesapp.backend.core.exceptions import (
    ApplicationError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from notesapp.backend.core.logging import get_logger
from notesapp.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    ExternalServiceError: 502,
    DatabaseError: 500,
}


def _get_request_id(request: Request) -> str | None:
    """Request ID set by the middleware, else the raw header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _request_fields(request: Request, request_id: str | None) -> dict[str, Any]:
    fields: dict[str, Any] = {"method": request.method, "path": request.url.path}
    if request_id:
        fields["request_id"] = request_id
    return fields


def _envelope(
    status_code: int,
    code: str,
    message: str,
    request_id: str | None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """
    Answer an ApplicationError with its mapped status.

    Unmapped subclasses are server errors (500). Only ValidationError
    carries details to the client, e.g. the missing fields or the unknown
    folder id.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    request_id = _get_request_id(request)

    fields = _request_fields(request, request_id)
    fields.update(code=exc.code, message=exc.message, status=status_code)
    if status_code >= 500:
        logger.error("Server error", extra=fields)
    else:
        logger.warning("Client error", extra=fields)

    details = exc.details if isinstance(exc, ValidationError) and exc.details else None
    return _envelope(status_code, exc.code, exc.message, request_id, details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Answer request validation failures with 400.

    This covers missing or mistyped body fields, malformed folder ids in
    the path or query, and bodies that are not JSON at all.
    """
    request_id = _get_request_id(request)
    errors = exc.errors()

    logger.warning(
        "Request validation failed",
        extra={**_request_fields(request, request_id), "error_count": len(errors)},
    )

    validation_errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", [])),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in errors
    ]
    return _envelope(
        400,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        request_id,
        {"validation_errors": validation_errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Answer anything else with a generic 500.

    The exception message never leaves the server. The exception type is
    added to the details when api_detailed_errors is on in features.yaml.
    """
    request_id = _get_request_id(request)

    logger.exception(
        "Unhandled exception",
        extra={**_request_fields(request, request_id), "exception_type": type(exc).__name__},
    )

    details = None
    if get_app_config().features.api_detailed_errors:
        details = {"exception_type": type(exc).__name__}
    return _envelope(500, "SYS_INTERNAL_ERROR", "An unexpected error occurred", request_id, details)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the three handlers on the app."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Exception handlers registered")

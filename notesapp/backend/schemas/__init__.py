# Pydantic schemas package
from notesapp.backend.schemas.base import (
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "ResponseMetadata",
]

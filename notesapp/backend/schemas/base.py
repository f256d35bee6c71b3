"""
Base Schemas.

Error envelope shared by every failing API response. Successful responses
return the affected row (or an array of rows) directly.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from notesapp.backend.core.utils import utc_now


class ResponseMetadata(BaseModel):
    """Metadata included in error responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    folder_id: str = Field(
        ...,
        description="Folder the note belongs to",
    )
    title: str | None = Field(
        default=None,
        description="Note title",
        examples=["Meeting notes"],
    )
    content: str | None = Field(
        default=None,
        description="Markdown content",
        examples=["# Agenda"],
    )


class NoteUpdate(BaseModel):
    """
    Schema for updating an existing note.

    Only fields present in the request body are written. At least one of
    them must be present.
    """

    title: str | None = Field(
        default=None,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Markdown content",
    )
    folder_id: str | None = Field(
        default=None,
        description="Move the note to another folder",
    )


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    folder_id: str = Field(description="Owning folder")
    title: str | None = Field(description="Note title")
    content: str | None = Field(description="Markdown content")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

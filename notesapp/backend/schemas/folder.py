"""
Folder Schemas.

Pydantic schemas for folder API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FolderCreate(BaseModel):
    """Schema for creating a folder. Blank names are rejected by the service."""

    name: str = Field(
        ...,
        max_length=255,
        description="Folder name",
        examples=["Work"],
    )


class FolderUpdate(BaseModel):
    """Schema for renaming a folder."""

    name: str = Field(
        ...,
        max_length=255,
        description="New folder name",
    )


class FolderResponse(BaseModel):
    """Schema for folder in API responses."""

    id: str = Field(description="Folder unique identifier")
    name: str = Field(description="Folder name")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

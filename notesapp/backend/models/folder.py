"""
Folder Model.

A named container for notes. Deleting a folder deletes its notes.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notesapp.backend.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from notesapp.backend.models.note import Note


class Folder(UUIDMixin, TimestampMixin, Base):
    """Folder database model."""

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    notes: Mapped[list["Note"]] = relationship(
        back_populates="folder",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name={self.name!r})>"

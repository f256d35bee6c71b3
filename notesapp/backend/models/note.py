"""
Note Model.

A markdown note living inside exactly one folder.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notesapp.backend.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from notesapp.backend.models.folder import Folder


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Title and content are both optional; front ends display a missing
    title as "Untitled Note".
    """

    __tablename__ = "notes"

    folder_id: Mapped[str] = mapped_column(
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    folder: Mapped["Folder"] = relationship(back_populates="notes")

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, folder_id={self.folder_id}, title={self.title!r})>"

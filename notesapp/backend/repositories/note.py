"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from sqlalchemy import func, select

from notesapp.backend.models.note import Note
from notesapp.backend.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds folder-scoped queries.
    """

    model = Note

    async def list_newest_first(self, folder_id: str | None = None) -> list[Note]:
        """
        Get notes ordered by creation time, newest first.

        Args:
            folder_id: Restrict to one folder; all notes when None

        Returns:
            List of notes
        """
        stmt = select(Note).order_by(Note.created_at.desc(), Note.id.desc())
        if folder_id is not None:
            stmt = stmt.where(Note.folder_id == folder_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_in_folder(self, folder_id: str) -> int:
        """Get the number of notes inside a folder."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(Note.folder_id == folder_id)
        )
        return result.scalar_one()

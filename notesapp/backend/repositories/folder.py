"""
Folder Repository.

Data access layer for folders.
"""

from sqlalchemy import select

from notesapp.backend.models.folder import Folder
from notesapp.backend.repositories.base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    """Repository for Folder model."""

    model = Folder

    async def list_oldest_first(self) -> list[Folder]:
        """Get every folder ordered by creation time, oldest first."""
        result = await self.session.execute(
            select(Folder).order_by(Folder.created_at.asc(), Folder.id.asc())
        )
        return list(result.scalars().all())

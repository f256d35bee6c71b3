"""
Folder Service.

Business logic for folders: trimmed, non-blank names and cascading deletes.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.backend.models.folder import Folder
from notesapp.backend.repositories.folder import FolderRepository
from notesapp.backend.repositories.note import NoteRepository
from notesapp.backend.schemas.folder import FolderCreate, FolderUpdate
from notesapp.backend.services.base import BaseService


class FolderService(BaseService):
    """Service for folder business logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = FolderRepository(session)
        self.notes = NoteRepository(session)

    def _clean_name(self, name: str | None) -> str:
        self._validate_required({"name": name}, ["name"])
        return name.strip()

    async def list_folders(self) -> list[Folder]:
        """List all folders, oldest first."""
        return await self._execute_db_operation(
            "list_folders",
            self.repo.list_oldest_first(),
        )

    async def get_folder(self, folder_id: str) -> Folder:
        """
        Get a folder by ID.

        Raises:
            NotFoundError: If folder not found
        """
        return await self._execute_db_operation(
            "get_folder",
            self.repo.get_by_id(folder_id),
        )

    async def create_folder(self, data: FolderCreate) -> Folder:
        """
        Create a folder.

        Raises:
            ValidationError: If the name is blank
        """
        name = self._clean_name(data.name)
        self._log_operation("Creating folder", name=name)

        folder = await self._execute_db_operation(
            "create_folder",
            self.repo.create(name=name),
        )

        self._log_debug("Folder created", folder_id=folder.id)
        return folder

    async def rename_folder(self, folder_id: str, data: FolderUpdate) -> Folder:
        """
        Rename a folder.

        Raises:
            ValidationError: If the name is blank
            NotFoundError: If folder not found
        """
        name = self._clean_name(data.name)
        self._log_operation("Renaming folder", folder_id=folder_id, name=name)

        return await self._execute_db_operation(
            "rename_folder",
            self.repo.update(folder_id, name=name),
        )

    async def delete_folder(self, folder_id: str) -> None:
        """
        Delete a folder together with every note inside it.

        Raises:
            NotFoundError: If folder not found
        """
        note_count = await self._execute_db_operation(
            "count_notes",
            self.notes.count_in_folder(folder_id),
        )
        self._log_operation("Deleting folder", folder_id=folder_id, note_count=note_count)

        await self._execute_db_operation(
            "delete_folder",
            self.repo.delete(folder_id),
        )

"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
handles validation, and implements business rules.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.backend.core.exceptions import ValidationError
from notesapp.backend.core.utils import empty_to_none
from notesapp.backend.models.note import Note
from notesapp.backend.repositories.folder import FolderRepository
from notesapp.backend.repositories.note import NoteRepository
from notesapp.backend.schemas.note import NoteCreate, NoteUpdate
from notesapp.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Every write that names a folder checks that the folder exists first,
    so an unknown folder is reported as a validation error rather than a
    constraint failure.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.folders = FolderRepository(session)

    async def _require_folder(self, folder_id: str) -> None:
        exists = await self._execute_db_operation(
            "check_folder",
            self.folders.exists(folder_id),
        )
        if not exists:
            raise ValidationError(
                "Folder does not exist",
                details={"folder_id": folder_id},
            )

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note inside a folder.

        Raises:
            ValidationError: If folder_id is blank or unknown
        """
        self._validate_required({"folder_id": data.folder_id}, ["folder_id"])
        await self._require_folder(data.folder_id)

        self._log_operation("Creating note", folder_id=data.folder_id)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                folder_id=data.folder_id,
                title=empty_to_none(data.title),
                content=empty_to_none(data.content),
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id(note_id),
        )

    async def list_notes(self, folder_id: str | None = None) -> list[Note]:
        """
        List notes newest first, optionally restricted to one folder.

        An unknown folder simply yields an empty list.
        """
        return await self._execute_db_operation(
            "list_notes",
            self.repo.list_newest_first(folder_id),
        )

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Update an existing note.

        Only fields present in the request are written; title and content
        may be set to null explicitly.

        Raises:
            ValidationError: If no fields are given or the folder is unknown
            NotFoundError: If note not found
        """
        update_data = data.model_dump(exclude_unset=True)

        if not update_data:
            raise ValidationError("No fields to update provided")

        if "folder_id" in update_data:
            self._validate_required(update_data, ["folder_id"])
            await self._require_folder(update_data["folder_id"])

        for field in ("title", "content"):
            if field in update_data:
                update_data[field] = empty_to_none(update_data[field])

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=sorted(update_data),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, **update_data),
        )

    async def delete_note(self, note_id: str) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note", note_id=note_id)

        await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )

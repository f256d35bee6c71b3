"""
Notes Store.

Single source of truth for the folders, notes and selected note shown by a
front end. Mutations are applied to the local collections first, then sent
to the server; the server row replaces the optimistic one on success and
the previous row is put back on failure.
"""

from collections.abc import Callable

from notesapp.backend.core.exceptions import NotFoundError, ValidationError
from notesapp.backend.core.logging import get_logger, log_with_source
from notesapp.backend.core.utils import empty_to_none, utc_now
from notesapp.backend.schemas.folder import FolderResponse
from notesapp.backend.schemas.note import NoteResponse
from notesapp.client.api import NotesAPIClient

logger = get_logger(__name__)

Listener = Callable[[], None]

DEFAULT_NOTE_TITLE = "Untitled Note"


def display_title(note: NoteResponse) -> str:
    """Title as shown to users."""
    return note.title or DEFAULT_NOTE_TITLE


class NotesStore:
    """
    Application state for folders, notes and the current selection.

    Folders are kept oldest first and notes newest first, the order the API
    returns them in. Listeners registered with subscribe() are called after
    every change.
    """

    def __init__(
        self,
        client: NotesAPIClient,
        default_note_title: str = DEFAULT_NOTE_TITLE,
        source: str = "tui",
    ) -> None:
        self.client = client
        self.default_note_title = default_note_title
        self.source = source
        self.folders: list[FolderResponse] = []
        self.notes: list[NoteResponse] = []
        self.selected_note_id: str | None = None
        self._listeners: list[Listener] = []

    # ---- subscriptions ----------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ---- queries ----------------------------------------------------------

    def folder(self, folder_id: str) -> FolderResponse | None:
        return next((f for f in self.folders if f.id == folder_id), None)

    def note(self, note_id: str) -> NoteResponse | None:
        return next((n for n in self.notes if n.id == note_id), None)

    def notes_in(self, folder_id: str) -> list[NoteResponse]:
        """Notes of one folder, newest first."""
        return [n for n in self.notes if n.folder_id == folder_id]

    @property
    def selected_note(self) -> NoteResponse | None:
        if self.selected_note_id is None:
            return None
        return self.note(self.selected_note_id)

    def _index(self, items: list, item_id: str) -> int | None:
        for i, item in enumerate(items):
            if item.id == item_id:
                return i
        return None

    def _replace_if_same(self, items: list, expected: object, replacement: object) -> None:
        """Swap `expected` for `replacement` unless a later change replaced it already."""
        for i, item in enumerate(items):
            if item is expected:
                items[i] = replacement
                return

    # ---- loading ----------------------------------------------------------

    async def load(self) -> None:
        """Fetch every folder and note from the server."""
        self.folders = await self.client.list_folders()
        self.notes = await self.client.list_notes()
        if self.selected_note_id is not None and self.note(self.selected_note_id) is None:
            self.selected_note_id = None
        log_with_source(
            logger,
            self.source,
            "debug",
            "Store loaded",
            folders=len(self.folders),
            notes=len(self.notes),
        )
        self._notify()

    # ---- folders ----------------------------------------------------------

    async def create_folder(self, name: str) -> FolderResponse:
        """
        Create a folder. The name is trimmed.

        Raises:
            ValidationError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise ValidationError("Folder name must not be blank")
        folder = await self.client.create_folder(name)
        self.folders.append(folder)
        self._notify()
        return folder

    async def rename_folder(self, folder_id: str, name: str) -> FolderResponse | None:
        """
        Rename a folder.

        A blank name is ignored and returns None; an unchanged name is a no-op.

        Raises:
            NotFoundError: If the folder is not in the store
        """
        index = self._index(self.folders, folder_id)
        if index is None:
            raise NotFoundError("Folder not found")
        previous = self.folders[index]

        name = name.strip()
        if not name:
            return None
        if name == previous.name:
            return previous

        optimistic = previous.model_copy(update={"name": name, "updated_at": utc_now()})
        self.folders[index] = optimistic
        self._notify()

        try:
            folder = await self.client.rename_folder(folder_id, name)
        except Exception:
            self._replace_if_same(self.folders, optimistic, previous)
            self._notify()
            raise

        self._replace_if_same(self.folders, optimistic, folder)
        self._notify()
        return folder

    async def delete_folder(self, folder_id: str) -> None:
        """
        Delete a folder and, locally, every note in it.

        Clears the selection when the selected note was inside the folder.
        """
        index = self._index(self.folders, folder_id)
        if index is None:
            raise NotFoundError("Folder not found")

        folders_before = list(self.folders)
        notes_before = list(self.notes)
        selected_before = self.selected_note_id

        del self.folders[index]
        self.notes = [n for n in self.notes if n.folder_id != folder_id]
        if selected_before is not None and self.note(selected_before) is None:
            self.selected_note_id = None
        self._notify()

        try:
            await self.client.delete_folder(folder_id)
        except Exception:
            self.folders = folders_before
            self.notes = notes_before
            self.selected_note_id = selected_before
            self._notify()
            raise

    # ---- notes ------------------------------------------------------------

    async def create_note(
        self,
        folder_id: str,
        title: str | None = None,
        content: str = "",
    ) -> NoteResponse:
        """Create a note in a folder and select it."""
        note = await self.client.create_note(
            folder_id,
            title=self.default_note_title if title is None else title,
            content=content,
        )
        self.notes.insert(0, note)
        self.selected_note_id = note.id
        self._notify()
        return note

    async def rename_note(self, note_id: str, title: str) -> NoteResponse | None:
        """
        Rename a note.

        A blank title is ignored and returns None; a title equal to the
        displayed one is a no-op.
        """
        current = self.note(note_id)
        if current is None:
            raise NotFoundError("Note not found")
        title = title.strip()
        if not title:
            return None
        if title == display_title(current):
            return current
        return await self._patch_note(note_id, title=title)

    async def update_note(self, note_id: str, title: str, content: str) -> NoteResponse:
        """Save title and content. Used as the autosave callback."""
        return await self._patch_note(note_id, title=title, content=content)

    async def move_note(self, note_id: str, folder_id: str) -> NoteResponse:
        """
        Move a note to another folder.

        Raises:
            ValidationError: If the target folder is not in the store
        """
        if self.folder(folder_id) is None:
            raise ValidationError("Folder does not exist", details={"folder_id": folder_id})
        return await self._patch_note(note_id, folder_id=folder_id)

    async def delete_note(self, note_id: str) -> None:
        """Delete a note, clearing the selection if it was selected."""
        index = self._index(self.notes, note_id)
        if index is None:
            raise NotFoundError("Note not found")

        removed = self.notes.pop(index)
        selected_before = self.selected_note_id
        if selected_before == note_id:
            self.selected_note_id = None
        self._notify()

        try:
            await self.client.delete_note(note_id)
        except Exception:
            self.notes.insert(min(index, len(self.notes)), removed)
            self.selected_note_id = selected_before
            self._notify()
            raise

    def select_note(self, note_id: str | None) -> None:
        """
        Select a note, or clear the selection with None.

        Raises:
            NotFoundError: If the note is not in the store
        """
        if note_id is not None and self.note(note_id) is None:
            raise NotFoundError("Note not found")
        if note_id == self.selected_note_id:
            return
        self.selected_note_id = note_id
        self._notify()

    async def _patch_note(self, note_id: str, **changes: str | None) -> NoteResponse:
        index = self._index(self.notes, note_id)
        if index is None:
            # not held locally; still let the server decide
            return await self.client.update_note(note_id, **changes)

        previous = self.notes[index]
        local = {
            key: empty_to_none(value) if key in ("title", "content") else value
            for key, value in changes.items()
        }
        optimistic = previous.model_copy(update={**local, "updated_at": utc_now()})
        self.notes[index] = optimistic
        self._notify()

        try:
            note = await self.client.update_note(note_id, **changes)
        except Exception as exc:
            log_with_source(
                logger,
                self.source,
                "warning",
                "Note update rolled back",
                note_id=note_id,
                error=str(exc),
            )
            self._replace_if_same(self.notes, optimistic, previous)
            self._notify()
            raise

        self._replace_if_same(self.notes, optimistic, note)
        self._notify()
        return note

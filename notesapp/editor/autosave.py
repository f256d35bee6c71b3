"""
Note Editor Autosave.

Keeps the edits of exactly one open note, decides when they differ from
what the server last confirmed and saves them once the user pauses typing.

Lifecycle of the status:

    EMPTY -> LOADED                 a note is opened
    LOADED -> DIRTY -> SCHEDULED    an edit diverges from the snapshot
    SCHEDULED -> SAVING             debounce elapsed and the pair still differs
    SAVING -> SAVED -> LOADED       save confirmed, then a short display delay
    SAVING -> ERROR                 save failed; edits kept, retried later
    any -> EMPTY                    selection cleared (pending edits flushed)

Only one save per controller is ever in flight. Results are applied only if
the note they were issued for is still the open one, checked through the
session generation.
"""

import asyncio
import dataclasses
import enum
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from notesapp.backend.core.logging import get_logger, log_with_source
from notesapp.editor.scheduler import ScheduledTask

logger = get_logger(__name__)


class SaveStatus(str, enum.Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    DIRTY = "dirty"
    SCHEDULED = "scheduled"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class NoteLike(Protocol):
    id: str
    title: str | None
    content: str | None


SaveCallback = Callable[[str, str, str], Awaitable[Any]]
StatusCallback = Callable[[SaveStatus], None]


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """A (title, content) pair. Missing values are normalized to ""."""

    title: str = ""
    content: str = ""

    @classmethod
    def from_note(cls, note: NoteLike) -> "Snapshot":
        return cls(title=note.title or "", content=note.content or "")


@dataclasses.dataclass(frozen=True)
class EditSession:
    """
    Immutable edit state of the open note.

    Replaced wholesale on every change. `generation` changes only when a
    different note is adopted.
    """

    note_id: str
    generation: int
    snapshot: Snapshot
    edited: Snapshot

    @property
    def dirty(self) -> bool:
        return self.edited != self.snapshot

    def with_edits(self, title: str | None = None, content: str | None = None) -> "EditSession":
        edited = dataclasses.replace(
            self.edited,
            title=self.edited.title if title is None else title,
            content=self.edited.content if content is None else content,
        )
        return dataclasses.replace(self, edited=edited)

    def synced(self, saved: Snapshot) -> "EditSession":
        return dataclasses.replace(self, snapshot=saved)

    def refreshed(self, server: Snapshot) -> "EditSession":
        """Take new server values, keeping fields the user has changed."""
        title = server.title if self.edited.title == self.snapshot.title else self.edited.title
        content = server.content if self.edited.content == self.snapshot.content else self.edited.content
        return dataclasses.replace(self, snapshot=server, edited=Snapshot(title, content))


class AutosaveController:
    """
    Debounced autosave for the note currently open in the editor.

    Args:
        save: Awaitable persistence callback, called as save(note_id, title, content)
        debounce_seconds: Quiet time after the last edit before saving
        saved_display_seconds: How long SAVED is shown before returning to LOADED
        retry_on_error: Re-arm the timer automatically after a failed save
        retry_delay_seconds: Delay before that automatic retry
        on_status: Called with every status change

    Any timing argument left as None is read from config/settings/editor.yaml.
    """

    def __init__(
        self,
        save: SaveCallback,
        debounce_seconds: float | None = None,
        saved_display_seconds: float | None = None,
        retry_on_error: bool | None = None,
        retry_delay_seconds: float | None = None,
        on_status: StatusCallback | None = None,
    ) -> None:
        if None in (debounce_seconds, saved_display_seconds, retry_on_error, retry_delay_seconds):
            from notesapp.backend.core.config import get_app_config

            editor = get_app_config().editor
            debounce_seconds = editor.debounce_seconds if debounce_seconds is None else debounce_seconds
            saved_display_seconds = (
                editor.saved_display_seconds if saved_display_seconds is None else saved_display_seconds
            )
            retry_on_error = editor.retry_on_error if retry_on_error is None else retry_on_error
            retry_delay_seconds = (
                editor.retry_delay_seconds if retry_delay_seconds is None else retry_delay_seconds
            )

        self._save = save
        self._debounce = debounce_seconds
        self._saved_display = saved_display_seconds
        self._retry_on_error = retry_on_error
        self._retry_delay = retry_delay_seconds
        self._on_status = on_status

        self._session: EditSession | None = None
        self._generation = 0
        self._status = SaveStatus.EMPTY
        self._last_error: Exception | None = None
        self._unsynced: dict[str, Snapshot] = {}
        self._in_flight: asyncio.Future[None] | None = None
        self._switch_lock = asyncio.Lock()
        self._timer = ScheduledTask(self._on_timer, name="autosave")
        self._saved_timer = ScheduledTask(self._on_saved_elapsed, name="saved-display")

    # ---- observation ------------------------------------------------------

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def session(self) -> EditSession | None:
        return self._session

    @property
    def note_id(self) -> str | None:
        return self._session.note_id if self._session else None

    @property
    def title(self) -> str:
        return self._session.edited.title if self._session else ""

    @property
    def content(self) -> str:
        return self._session.edited.content if self._session else ""

    @property
    def dirty(self) -> bool:
        return self._session is not None and self._session.dirty

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def unsynced_note_ids(self) -> list[str]:
        """Notes whose edits could not be saved when they were closed."""
        return list(self._unsynced)

    def _set_status(self, status: SaveStatus) -> None:
        if status is self._status:
            return
        self._status = status
        if self._on_status is not None:
            self._on_status(status)

    def _is_current(self, session: EditSession) -> bool:
        return self._session is not None and self._session.generation == session.generation

    # ---- operations -------------------------------------------------------

    async def open(self, note: NoteLike | None) -> None:
        """
        Make `note` the open note, or clear the editor when None.

        Opening the note that is already open refreshes its snapshot from the
        given server values. Opening a different note first saves the pending
        edits of the current one, so the old note's write always precedes the
        new note's fields becoming visible.
        """
        async with self._switch_lock:
            current = self._session
            if note is not None and current is not None and note.id == current.note_id:
                self._refresh(note)
                return

            await self._leave_current()

            if note is None:
                self._clear()
                return

            self._generation += 1
            snapshot = Snapshot.from_note(note)
            edited = self._unsynced.pop(note.id, snapshot)
            self._session = EditSession(note.id, self._generation, snapshot, edited)
            self._last_error = None
            self._set_status(SaveStatus.LOADED)
            log_with_source(logger, "editor", "debug", "Note opened", note_id=note.id)

            if self._session.dirty:
                log_with_source(
                    logger, "editor", "info", "Restored unsynced edits", note_id=note.id
                )
                self._arm()

    def edit(self, title: str | None = None, content: str | None = None) -> None:
        """
        Apply a user edit to the open note.

        Arms (or re-arms) the debounce timer while the pair differs from the
        snapshot and disarms it once the pair matches again. Must be called
        from the event loop thread.
        """
        session = self._session
        if session is None:
            return
        session = session.with_edits(title=title, content=content)
        self._session = session

        if self._in_flight is not None:
            # completion re-arms the timer if still dirty
            return

        if session.dirty:
            self._arm()
        else:
            self._timer.cancel()
            if self._status in (SaveStatus.DIRTY, SaveStatus.SCHEDULED, SaveStatus.ERROR):
                self._set_status(SaveStatus.LOADED)

    async def flush(self) -> bool:
        """
        Save pending edits now, skipping the debounce wait.

        Returns:
            True when the open note has no unsaved edits afterwards
        """
        self._timer.cancel()
        await self._wait_in_flight()
        self._timer.cancel()

        session = self._session
        if session is None or not session.dirty:
            return True

        self._saved_timer.cancel()
        return await self._persist(session)

    async def discard(self, note_id: str) -> None:
        """
        Forget a note that no longer exists on the server.

        Drops its unsynced edits and, if it is the open note, closes it
        without saving.
        """
        self._unsynced.pop(note_id, None)
        async with self._switch_lock:
            if self._session is None or self._session.note_id != note_id:
                return
            self._timer.cancel()
            self._saved_timer.cancel()
            await self._wait_in_flight()
            self._timer.cancel()
            self._saved_timer.cancel()
            self._clear()

    async def close(self) -> None:
        """Flush the open note and stop all timers. The controller stays usable."""
        async with self._switch_lock:
            await self._leave_current()
            self._clear()
        await self._timer.wait()
        await self._saved_timer.wait()

    # ---- internals --------------------------------------------------------

    def _clear(self) -> None:
        self._session = None
        self._last_error = None
        self._set_status(SaveStatus.EMPTY)

    def _arm(self) -> None:
        self._saved_timer.cancel()
        self._set_status(SaveStatus.DIRTY)
        self._timer.schedule(self._debounce)
        self._set_status(SaveStatus.SCHEDULED)

    def _refresh(self, note: NoteLike) -> None:
        session = self._session.refreshed(Snapshot.from_note(note))
        self._session = session
        if self._in_flight is not None:
            return
        if session.dirty:
            if not self._timer.pending:
                self._arm()
        else:
            self._timer.cancel()
            if self._status in (SaveStatus.DIRTY, SaveStatus.SCHEDULED, SaveStatus.ERROR):
                self._set_status(SaveStatus.LOADED)

    async def _leave_current(self) -> None:
        """Flush the open note before it is replaced; keep edits that fail."""
        session = self._session
        if session is None:
            return

        saved = await self.flush()
        while saved and self._session is not None and self._session.dirty:
            # edits arrived while the flush was in flight
            saved = await self.flush()

        self._timer.cancel()
        self._saved_timer.cancel()

        session = self._session
        if session is not None and session.dirty:
            self._unsynced[session.note_id] = session.edited
            log_with_source(
                logger,
                "editor",
                "warning",
                "Keeping unsynced edits for closed note",
                note_id=session.note_id,
            )

    async def _wait_in_flight(self) -> None:
        while self._in_flight is not None:
            await asyncio.shield(self._in_flight)

    async def _on_timer(self) -> None:
        session = self._session
        if session is None:
            return
        if not session.dirty:
            if self._status is SaveStatus.SCHEDULED:
                self._set_status(SaveStatus.LOADED)
            return
        if self._in_flight is not None:
            return
        await self._persist(session)

    async def _on_saved_elapsed(self) -> None:
        if self._status is SaveStatus.SAVED:
            self._set_status(SaveStatus.LOADED)

    async def _persist(self, session: EditSession) -> bool:
        """Run one save for `session` and apply the outcome if still current."""
        target = session.edited
        self._in_flight = asyncio.get_running_loop().create_future()
        if self._is_current(session):
            self._set_status(SaveStatus.SAVING)
        log_with_source(logger, "editor", "debug", "Saving note", note_id=session.note_id)

        try:
            await self._save(session.note_id, target.title, target.content)
        except Exception as exc:
            ok = False
            log_with_source(
                logger,
                "editor",
                "warning",
                "Note save failed",
                note_id=session.note_id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            if self._is_current(session):
                self._last_error = exc
                self._set_status(SaveStatus.ERROR)
        else:
            ok = True
            if self._is_current(session):
                self._session = self._session.synced(target)
                self._last_error = None
                if not self._session.dirty:
                    self._set_status(SaveStatus.SAVED)
            log_with_source(logger, "editor", "info", "Note saved", note_id=session.note_id)
        finally:
            done, self._in_flight = self._in_flight, None
            done.set_result(None)

        if self._is_current(session):
            self._after_save(ok, target)
        return ok

    def _after_save(self, ok: bool, target: Snapshot) -> None:
        if ok:
            if self._session.dirty:
                self._arm()
            else:
                self._saved_timer.schedule(self._saved_display)
        elif self._retry_on_error:
            self._timer.schedule(self._retry_delay)
        elif self._session.edited != target:
            # typed while the failed save was in flight
            self._arm()

"""
Folder Notes TUI.

Folder/note tree on the left, title and markdown editor on the right.
Edits are saved by the AutosaveController once typing pauses; the status
line shows Unsaved / Saving… / Saved / Save failed.

Keys:
    ctrl+f  new folder          ctrl+n  new note in the highlighted folder
    f2      rename              ctrl+d  delete (asks for confirmation)
    ctrl+s  save now            ctrl+q  quit (saves pending edits first)
"""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Input, Label, Static, TextArea, Tree
from textual.widgets.tree import TreeNode

from notesapp.backend.core.config import get_app_config
from notesapp.backend.core.exceptions import ApplicationError
from notesapp.backend.core.logging import get_logger, log_with_source
from notesapp.client.api import NotesAPIClient
from notesapp.editor.autosave import AutosaveController, SaveStatus
from notesapp.editor.store import NotesStore, display_title

logger = get_logger(__name__)

STATUS_TEXT = {
    SaveStatus.EMPTY: "",
    SaveStatus.LOADED: "",
    SaveStatus.DIRTY: "[yellow]Unsaved[/]",
    SaveStatus.SCHEDULED: "[yellow]Unsaved[/]",
    SaveStatus.SAVING: "[cyan]Saving…[/]",
    SaveStatus.SAVED: "[green]Saved[/]",
    SaveStatus.ERROR: "[red]Save failed[/]",
}

NodeRef = tuple[str, str]
"""Tree node payload: ("folder" | "note", id)."""


class PromptScreen(ModalScreen[str | None]):
    """Single-line text prompt. Dismisses with the entered text, or None on escape."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, prompt: str, value: str = "") -> None:
        super().__init__()
        self._prompt = prompt
        self._value = value

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Label(self._prompt)
            yield Input(value=self._value, id="prompt-input")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    @on(Input.Submitted, "#prompt-input")
    def on_submit(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no confirmation."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, question: str) -> None:
        super().__init__()
        self._question = question

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(self._question)
            with Horizontal(classes="buttons"):
                yield Button("Delete", variant="error", id="confirm-yes")
                yield Button("Cancel", id="confirm-no")

    @on(Button.Pressed, "#confirm-yes")
    def on_yes(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#confirm-no")
    def on_no(self) -> None:
        self.dismiss(False)

    def action_cancel(self) -> None:
        self.dismiss(False)


class NotesTUI(App):
    """Terminal front end for folders and notes."""

    TITLE = "Folder Notes"
    SUB_TITLE = "Notes with autosave"

    CSS = """
    #sidebar {
        width: 36;
        border: solid $primary;
    }

    #editor {
        width: 1fr;
        padding: 0 1;
    }

    #note-title {
        margin: 0 0 1 0;
    }

    #note-content {
        height: 1fr;
    }

    #save-status {
        height: 1;
        padding: 0 1;
        background: $surface;
    }

    PromptScreen, ConfirmScreen {
        align: center middle;
    }

    .dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    .buttons {
        height: auto;
        margin: 1 0 0 0;
    }
    """

    BINDINGS = [
        Binding("ctrl+f", "new_folder", "New Folder"),
        Binding("ctrl+n", "new_note", "New Note"),
        Binding("f2", "rename", "Rename"),
        Binding("ctrl+d", "delete", "Delete"),
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, client: NotesAPIClient | None = None) -> None:
        super().__init__()
        editor_config = get_app_config().editor
        self.client = client or NotesAPIClient(frontend="tui")
        self.store = NotesStore(
            self.client,
            default_note_title=editor_config.default_note_title,
            source="tui",
        )
        self.controller = AutosaveController(
            save=self.store.update_note,
            debounce_seconds=editor_config.debounce_seconds,
            saved_display_seconds=editor_config.saved_display_seconds,
            retry_on_error=editor_config.retry_on_error,
            retry_delay_seconds=editor_config.retry_delay_seconds,
            on_status=self._show_status,
        )
        self._tree_shape: list[tuple[str, tuple[str, ...]]] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            tree: Tree[NodeRef] = Tree("Folders", id="sidebar")
            tree.show_root = False
            yield tree
            with Vertical(id="editor"):
                yield Input(placeholder="Title", id="note-title", disabled=True)
                yield TextArea(id="note-content", language="markdown", disabled=True)
        yield Static("", id="save-status")
        yield Footer()

    def on_mount(self) -> None:
        self.store.subscribe(self._sync_tree)
        self._load()

    @work(exclusive=True, group="load")
    async def _load(self) -> None:
        try:
            await self.store.load()
        except ApplicationError as e:
            self.notify(f"Cannot load notes: {e.message}", severity="error", timeout=10)

    # ---- status -----------------------------------------------------------

    def _show_status(self, status: SaveStatus) -> None:
        text = STATUS_TEXT[status]
        if status is SaveStatus.ERROR and self.controller.last_error is not None:
            text = f"{text} [dim]({escape(str(self.controller.last_error))})[/]"
        self.query_one("#save-status", Static).update(text)

    # ---- tree -------------------------------------------------------------

    def _shape(self) -> list[tuple[str, tuple[str, ...]]]:
        return [
            (folder.id, tuple(n.id for n in self.store.notes_in(folder.id)))
            for folder in self.store.folders
        ]

    def _sync_tree(self) -> None:
        """Mirror the store into the tree, relabelling in place when possible."""
        tree = self.query_one("#sidebar", Tree)
        shape = self._shape()

        if shape == self._tree_shape:
            for folder_node in tree.root.children:
                folder = self.store.folder(folder_node.data[1])
                folder_node.set_label(Text(folder.name))
                for note_node in folder_node.children:
                    note = self.store.note(note_node.data[1])
                    note_node.set_label(Text(display_title(note)))
            return

        expanded = {node.data[1] for node in tree.root.children if node.is_expanded}
        tree.clear()
        selected_node: TreeNode[NodeRef] | None = None
        for folder in self.store.folders:
            folder_node = tree.root.add(Text(folder.name), data=("folder", folder.id))
            for note in self.store.notes_in(folder.id):
                node = folder_node.add_leaf(Text(display_title(note)), data=("note", note.id))
                if note.id == self.store.selected_note_id:
                    selected_node = node
                    expanded.add(folder.id)
            if folder.id in expanded:
                folder_node.expand()
        self._tree_shape = shape

        if selected_node is not None:
            tree.move_cursor(selected_node)

    def _cursor_ref(self) -> NodeRef | None:
        node = self.query_one("#sidebar", Tree).cursor_node
        return node.data if node is not None else None

    def _cursor_folder_id(self) -> str | None:
        ref = self._cursor_ref()
        if ref is None:
            return None
        kind, item_id = ref
        if kind == "folder":
            return item_id
        note = self.store.note(item_id)
        return note.folder_id if note else None

    @on(Tree.NodeSelected, "#sidebar")
    def on_node_selected(self, event: Tree.NodeSelected) -> None:
        if event.node.data is None:
            return
        kind, item_id = event.node.data
        if kind == "note":
            self._open_note(item_id)

    # ---- editor -----------------------------------------------------------

    @work(group="open")
    async def _open_note(self, note_id: str | None) -> None:
        """Switch the editor to a note. The previous note is flushed first."""
        if note_id is not None:
            self.store.select_note(note_id)
            await self.controller.open(self.store.note(note_id))
        else:
            self.store.select_note(None)
            await self.controller.open(None)
        self._load_fields()

    def _load_fields(self) -> None:
        title_input = self.query_one("#note-title", Input)
        text_area = self.query_one("#note-content", TextArea)
        has_note = self.controller.note_id is not None
        title_input.value = self.controller.title
        text_area.load_text(self.controller.content)
        title_input.disabled = not has_note
        text_area.disabled = not has_note

    @on(Input.Changed, "#note-title")
    def on_title_changed(self, event: Input.Changed) -> None:
        self.controller.edit(title=event.value)

    @on(TextArea.Changed, "#note-content")
    def on_content_changed(self, event: TextArea.Changed) -> None:
        self.controller.edit(content=event.text_area.text)

    # ---- actions ----------------------------------------------------------

    @work(group="mutate")
    async def action_new_folder(self) -> None:
        name = await self.push_screen_wait(PromptScreen("New folder name"))
        if name is None or not name.strip():
            return
        try:
            await self.store.create_folder(name)
        except ApplicationError as e:
            self.notify(e.message, severity="error")

    @work(group="mutate")
    async def action_new_note(self) -> None:
        folder_id = self._cursor_folder_id()
        if folder_id is None:
            self.notify("Select a folder first", severity="warning")
            return
        try:
            note = await self.store.create_note(folder_id)
        except ApplicationError as e:
            self.notify(e.message, severity="error")
            return
        self._open_note(note.id)

    @work(group="mutate")
    async def action_rename(self) -> None:
        ref = self._cursor_ref()
        if ref is None:
            return
        kind, item_id = ref
        try:
            if kind == "folder":
                folder = self.store.folder(item_id)
                name = await self.push_screen_wait(PromptScreen("Rename folder", folder.name))
                if name is not None:
                    await self.store.rename_folder(item_id, name)
            else:
                if item_id == self.controller.note_id:
                    # keep the rename from racing a pending autosave of the old title
                    await self.controller.flush()
                note = self.store.note(item_id)
                title = await self.push_screen_wait(PromptScreen("Rename note", display_title(note)))
                if title is not None and await self.store.rename_note(item_id, title):
                    if item_id == self.controller.note_id:
                        await self.controller.open(self.store.note(item_id))
                        self._load_fields()
        except ApplicationError as e:
            self.notify(e.message, severity="error")

    @work(group="mutate")
    async def action_delete(self) -> None:
        ref = self._cursor_ref()
        if ref is None:
            return
        kind, item_id = ref
        if kind == "folder":
            folder = self.store.folder(item_id)
            question = (
                f'Are you sure you want to delete folder "{folder.name}"? '
                "This will also delete all notes inside."
            )
        else:
            question = f'Are you sure you want to delete note "{display_title(self.store.note(item_id))}"?'

        if not await self.push_screen_wait(ConfirmScreen(question)):
            return

        note_ids = (
            [n.id for n in self.store.notes_in(item_id)] if kind == "folder" else [item_id]
        )
        try:
            if kind == "folder":
                await self.store.delete_folder(item_id)
            else:
                await self.store.delete_note(item_id)
        except ApplicationError as e:
            self.notify(e.message, severity="error")
            return

        for note_id in note_ids:
            await self.controller.discard(note_id)
        self._load_fields()

    @work(group="save")
    async def action_save(self) -> None:
        if await self.controller.flush():
            if self.controller.note_id is not None:
                self.notify("Saved")
        else:
            self.notify("Save failed, will retry", severity="error")

    async def action_quit(self) -> None:
        await self.controller.close()
        unsynced = self.controller.unsynced_note_ids
        if unsynced:
            log_with_source(
                logger, "tui", "warning", "Quitting with unsynced notes", note_ids=unsynced
            )
        await self.client.close()
        self.exit()

"""
End-to-End Tests for the terminal UI.

Runs NotesTUI headless against the in-process API.
"""

import pytest
from textual.widgets import Input, Tree

from notesapp.client.api import NotesAPIClient
from notesapp.editor.autosave import SaveStatus
from notesapp.editor.store import NotesStore
from notesapp.tui.app import STATUS_TEXT, NotesTUI


@pytest.mark.asyncio
async def test_tree_mirrors_server(e2e_client: NotesAPIClient, store: NotesStore):
    """Folders and their notes appear in the sidebar, untitled notes by default title."""
    work = await store.create_folder("Work")
    await store.create_folder("Home")
    await store.create_note(work.id, title="")

    app = NotesTUI(client=e2e_client)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()

        tree = app.query_one("#sidebar", Tree)
        assert [str(node.label) for node in tree.root.children] == ["Work", "Home"]
        work_node = tree.root.children[0]
        assert [str(node.label) for node in work_node.children] == ["Untitled Note"]


@pytest.mark.asyncio
async def test_editor_disabled_until_a_note_is_open(e2e_client: NotesAPIClient):
    app = NotesTUI(client=e2e_client)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.query_one("#note-title", Input).disabled is True
        assert app.controller.status is SaveStatus.EMPTY


def test_every_status_has_a_label():
    assert set(STATUS_TEXT) == set(SaveStatus)
    assert "Saved" in STATUS_TEXT[SaveStatus.SAVED]
    assert "Save failed" in STATUS_TEXT[SaveStatus.ERROR]

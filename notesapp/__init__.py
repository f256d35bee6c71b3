"""
Folder Notes.

- backend/: FastAPI service, database, configuration
- client/: Async HTTP client for the backend
- editor/: Notes store and debounced autosave shared by the front ends
- cli/: Command-line client (Typer + Rich)
- tui/: Terminal UI (Textual)
"""

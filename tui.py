#!/usr/bin/env python3
"""
Folder Notes TUI.

Terminal interface for folders and notes. Needs a running backend
(python cli.py --service server).

Usage:
    python tui.py
    python tui.py --debug
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notesapp.backend.core.logging import setup_logging
from notesapp.tui.app import NotesTUI


def main() -> None:
    level = "DEBUG" if "--debug" in sys.argv else None
    setup_logging(level=level, enable_console=False)
    NotesTUI().run()


if __name__ == "__main__":
    main()

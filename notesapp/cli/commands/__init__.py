"""
CLI Commands.

Organized by resource.
"""

from notesapp.cli.commands.folders import app as folders_app
from notesapp.cli.commands.health import app as health_app
from notesapp.cli.commands.notes import app as notes_app

__all__ = [
    "folders_app",
    "health_app",
    "notes_app",
]

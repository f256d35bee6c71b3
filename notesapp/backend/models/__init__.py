# SQLAlchemy models package. Importing it registers every table on Base.metadata.
from notesapp.backend.models.base import Base
from notesapp.backend.models.folder import Folder
from notesapp.backend.models.note import Note

__all__ = [
    "Base",
    "Folder",
    "Note",
]

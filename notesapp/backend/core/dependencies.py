"""
FastAPI Dependencies.

Endpoints receive a ready service bound to the request's session:

    @router.get("")
    async def list_folders(service: FolderServiceDep) -> list[FolderResponse]:
        ...

Tests swap the session by overriding get_db_session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.backend.core.database import get_db_session
from notesapp.backend.services.folder import FolderService
from notesapp.backend.services.note import NoteService

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_folder_service(db: DbSession) -> FolderService:
    return FolderService(db)


def get_note_service(db: DbSession) -> NoteService:
    return NoteService(db)


FolderServiceDep = Annotated[FolderService, Depends(get_folder_service)]
NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]

"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from notesapp.backend.api.v1.endpoints import folders, notes

router = APIRouter()

router.include_router(folders.router, prefix="/folders", tags=["folders"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])

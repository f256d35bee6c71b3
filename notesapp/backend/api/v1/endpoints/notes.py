"""
Notes API Endpoints.

Note IDs in the path are taken as-is, so an id that is not a UUID is simply
not found (404). The folder filter on the list must be a UUID.
"""

from uuid import UUID

from fastapi import APIRouter, Query, Response

from notesapp.backend.core.dependencies import NoteServiceDep
from notesapp.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate

router = APIRouter()


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description="Get notes newest first, optionally only those in one folder.",
)
async def list_notes(
    service: NoteServiceDep,
    folder_id: UUID | None = Query(
        default=None,
        description="Only return notes in this folder",
    ),
) -> list[NoteResponse]:
    notes = await service.list_notes(str(folder_id) if folder_id else None)
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a note in an existing folder. Title and content are optional.",
)
async def create_note(data: NoteCreate, service: NoteServiceDep) -> NoteResponse:
    note = await service.create_note(data)
    return NoteResponse.model_validate(note)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
)
async def get_note(note_id: str, service: NoteServiceDep) -> NoteResponse:
    note = await service.get_note(note_id)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description=(
        "Update title, content or folder. Only provided fields are written; "
        "empty title or content is stored as null."
    ),
)
async def update_note(note_id: str, data: NoteUpdate, service: NoteServiceDep) -> NoteResponse:
    note = await service.update_note(note_id, data)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a note",
)
async def delete_note(note_id: str, service: NoteServiceDep) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=204)

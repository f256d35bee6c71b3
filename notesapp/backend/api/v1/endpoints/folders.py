"""
Folders API Endpoints.

Folder IDs in the path must be UUIDs; anything else is rejected with 400
before reaching the service.
"""

from uuid import UUID

from fastapi import APIRouter, Response

from notesapp.backend.core.dependencies import FolderServiceDep
from notesapp.backend.schemas.folder import FolderCreate, FolderResponse, FolderUpdate

router = APIRouter()


@router.get(
    "",
    response_model=list[FolderResponse],
    summary="List folders",
    description="Get every folder, oldest first.",
)
async def list_folders(service: FolderServiceDep) -> list[FolderResponse]:
    folders = await service.list_folders()
    return [FolderResponse.model_validate(folder) for folder in folders]


@router.post(
    "",
    response_model=FolderResponse,
    status_code=201,
    summary="Create a folder",
    description="Create a folder. The name is trimmed and must not be blank.",
)
async def create_folder(data: FolderCreate, service: FolderServiceDep) -> FolderResponse:
    folder = await service.create_folder(data)
    return FolderResponse.model_validate(folder)


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    summary="Get a folder",
)
async def get_folder(folder_id: UUID, service: FolderServiceDep) -> FolderResponse:
    folder = await service.get_folder(str(folder_id))
    return FolderResponse.model_validate(folder)


@router.put(
    "/{folder_id}",
    response_model=FolderResponse,
    summary="Rename a folder",
    description="Replace the folder name. Same trimming and blank check as create.",
)
async def rename_folder(
    folder_id: UUID,
    data: FolderUpdate,
    service: FolderServiceDep,
) -> FolderResponse:
    folder = await service.rename_folder(str(folder_id), data)
    return FolderResponse.model_validate(folder)


@router.delete(
    "/{folder_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a folder",
    description="Permanently delete a folder and every note inside it.",
)
async def delete_folder(folder_id: UUID, service: FolderServiceDep) -> Response:
    await service.delete_folder(str(folder_id))
    return Response(status_code=204)

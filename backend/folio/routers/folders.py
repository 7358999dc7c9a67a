"""Folder routes, including the combined browse listing and breadcrumb path."""

from typing import Optional

from fastapi import APIRouter, Query

from folio.dependencies import DocumentStoreDep
from folio.models import (
    DeleteResult,
    EntityKind,
    Folder,
    FolderCreate,
    FolderUpdate,
    MoveRequest,
    StoreItem,
)

router = APIRouter()


@router.post("/", response_model=Folder, status_code=201)
async def create_folder(body: FolderCreate, store: DocumentStoreDep):
    return await store.create_folder(
        body.name,
        parent_folder_id=body.parent_folder_id,
        color_hex=body.color_hex,
    )


@router.get("/items", response_model=list[StoreItem])
async def list_items(store: DocumentStoreDep, folder_id: Optional[str] = Query(default=None)):
    if folder_id is not None:
        await store.load_folder(folder_id)
    return await store.list_items(folder_id)


@router.get("/{folder_id}", response_model=Folder)
async def get_folder(folder_id: str, store: DocumentStoreDep):
    return await store.load_folder(folder_id)


@router.get("/{folder_id}/path", response_model=list[Folder])
async def get_folder_path(folder_id: str, store: DocumentStoreDep):
    return await store.resolve_path(folder_id)


@router.put("/{folder_id}", response_model=Folder)
async def update_folder(folder_id: str, body: FolderUpdate, store: DocumentStoreDep):
    folder = None
    if body.name is not None:
        folder = await store.rename(folder_id, body.name, kind=EntityKind.FOLDER)
    if body.color_hex is not None or body.clear_color:
        folder = await store.update_metadata(
            folder_id,
            color_hex=None if body.clear_color else body.color_hex,
            kind=EntityKind.FOLDER,
        )
    if folder is None:
        folder = await store.load_folder(folder_id)
    return folder


@router.post("/{folder_id}/move", response_model=Folder)
async def move_folder(folder_id: str, body: MoveRequest, store: DocumentStoreDep):
    return await store.move(folder_id, body.parent_folder_id, kind=EntityKind.FOLDER)


@router.delete("/{folder_id}", response_model=DeleteResult)
async def delete_folder(folder_id: str, store: DocumentStoreDep, permanent: bool = False):
    return await store.delete(folder_id, permanent=permanent, kind=EntityKind.FOLDER)

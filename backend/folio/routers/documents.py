"""Document routes."""

from fastapi import APIRouter

from folio.dependencies import DocumentStoreDep
from folio.models import (
    DeleteResult,
    Document,
    DocumentCreate,
    DocumentUpdate,
    EntityKind,
    MoveRequest,
    Page,
    PageCreate,
)

router = APIRouter()


@router.post("/", response_model=Document, status_code=201)
async def create_document(body: DocumentCreate, store: DocumentStoreDep):
    return await store.create_document(
        body.name,
        parent_folder_id=body.parent_folder_id,
        template=body.template,
        page_size=body.page_size,
    )


@router.get("/{document_id}", response_model=Document)
async def get_document(document_id: str, store: DocumentStoreDep):
    return await store.load_document(document_id)


@router.put("/{document_id}", response_model=Document)
async def update_document(document_id: str, body: DocumentUpdate, store: DocumentStoreDep):
    document = None
    if body.name is not None:
        document = await store.rename(document_id, body.name, kind=EntityKind.DOCUMENT)
    if body.page_size is not None:
        document = await store.update_metadata(
            document_id, page_size=body.page_size, kind=EntityKind.DOCUMENT
        )
    if document is None:
        document = await store.load_document(document_id)
    return document


@router.post("/{document_id}/move", response_model=Document)
async def move_document(document_id: str, body: MoveRequest, store: DocumentStoreDep):
    return await store.move(document_id, body.parent_folder_id, kind=EntityKind.DOCUMENT)


@router.delete("/{document_id}", response_model=DeleteResult)
async def delete_document(document_id: str, store: DocumentStoreDep, permanent: bool = False):
    return await store.delete(document_id, permanent=permanent, kind=EntityKind.DOCUMENT)


@router.post("/{document_id}/pages", response_model=Page, status_code=201)
async def add_page(document_id: str, body: PageCreate, store: DocumentStoreDep):
    return await store.add_page(document_id, body.template)


@router.delete("/{document_id}/pages/{page_id}", response_model=Document)
async def delete_page(document_id: str, page_id: str, store: DocumentStoreDep):
    return await store.delete_page(document_id, page_id)

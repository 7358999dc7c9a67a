"""Trash routes."""

from fastapi import APIRouter, HTTPException

from folio.dependencies import DocumentStoreDep, TrashServiceDep, TrashSweeperDep
from folio.models import DeletedRecord, StoreItem, SweepResult, TrashSummary

router = APIRouter()


@router.get("/", response_model=list[DeletedRecord])
async def list_trash(trash: TrashServiceDep):
    return await trash.load_all()


@router.get("/summary", response_model=TrashSummary)
async def trash_summary(trash: TrashServiceDep):
    return await trash.summary()


@router.post("/sweep", response_model=SweepResult)
async def sweep_trash(sweeper: TrashSweeperDep):
    return await sweeper.run_once()


@router.post("/{record_id}/restore", response_model=StoreItem)
async def restore_item(record_id: str, store: DocumentStoreDep):
    return await store.restore(record_id)


@router.delete("/{record_id}")
async def purge_item(record_id: str, trash: TrashServiceDep):
    purged = await trash.purge(record_id)
    if not purged:
        raise HTTPException(404, "Trash record not found")
    return {"status": "purged", "id": record_id}


@router.delete("/")
async def empty_trash(trash: TrashServiceDep):
    purged = await trash.purge_all()
    return {"status": "emptied", "purged": purged}

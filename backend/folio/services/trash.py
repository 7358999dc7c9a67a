"""Soft-delete staging area: retained snapshots, restore, purge and expiry."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from folio.errors import NotFoundError
from folio.logging import get_logger
from folio.models import (
    DeletedRecord,
    Document,
    EntityKind,
    Folder,
    SweepResult,
    TrashSummary,
)
from folio.storage.codec import DELETED_RECORD_CODEC, codec_for, decode_snapshot
from folio.storage.repository import RecordRepository

logger = get_logger("services.trash")

TRASH_DIRNAME = "trash"
TRASH_EXTENSION = ".trash"


class TrashService:
    """
    Deleted-record store.

    Records move ``SoftDeleted -> Restored | Purged``. The service never writes
    to primary storage: ``restore`` hands the revived entity back and the
    caller re-saves it.
    """

    def __init__(self, root: Path, durable: bool = True):
        self.root = Path(root)
        self.records: RecordRepository[DeletedRecord] = RecordRepository(
            self.root / TRASH_DIRNAME,
            TRASH_EXTENSION,
            DELETED_RECORD_CODEC,
            durable=durable,
        )

    async def stage(self, entity: Union[Document, Folder]) -> DeletedRecord:
        """Wrap a full snapshot of ``entity`` in a new deleted record and persist it."""
        kind = EntityKind(entity.kind)
        record = DeletedRecord(
            original_id=entity.id,
            name=entity.name,
            kind=kind,
            data=codec_for(kind).encode(entity),
            parent_folder_id=entity.parent_folder_id,
        )
        await self.records.save(record)
        logger.info(f"Moved {kind.value} to trash: {entity.name} ({entity.id[:8]})")
        return record

    async def load_all(self) -> list[DeletedRecord]:
        """All deleted records, most recently deleted first."""
        records = await self.records.load_all()
        return sorted(records, key=lambda r: r.deleted_at, reverse=True)

    async def get(self, record_id: str) -> DeletedRecord:
        return await self.records.load(record_id)

    async def restore(self, record_id: str) -> Union[Document, Folder]:
        """
        Decode the snapshot and drop the deleted record.

        :raises NotFoundError: If the record is gone
        :raises CorruptionError: If the snapshot does not decode; the record
            is left in place for a later attempt
        """
        record = await self.records.load(record_id)
        entity = decode_snapshot(record.kind, record.data, record.original_id)
        await self.records.remove(record_id)
        logger.info(f"Restored {record.kind.value} from trash: {record.name} ({record.original_id[:8]})")
        return entity

    async def requeue(self, record: DeletedRecord) -> DeletedRecord:
        """Put a record taken out by :meth:`restore` back, keeping its id and deletion time."""
        return await self.records.save(record)

    async def purge(self, record_id: str) -> bool:
        """
        Permanently delete one record.

        :return: False if the record was already gone (not an error)
        :rtype: bool
        """
        try:
            removed = await self.records.remove(record_id)
        except NotFoundError:
            return False
        if removed:
            logger.info(f"Purged trash record {record_id[:8]}")
        return removed

    async def purge_all(self) -> int:
        """Empty the trash. Returns the number of records removed."""
        purged = 0
        for record in await self.load_all():
            if await self.purge(record.id):
                purged += 1
        logger.info(f"Emptied trash: {purged} record(s) purged")
        return purged

    async def sweep_expired(
        self,
        retention_days: Optional[int],
        now: Optional[datetime] = None,
    ) -> SweepResult:
        """
        Purge every record older than the retention window.

        ``retention_days=None`` keeps everything. A record purged or restored
        concurrently is simply skipped.
        """
        result = SweepResult(retention_days=retention_days)
        if retention_days is None:
            result.retained = len(await self.records.load_all())
            return result

        now = now or datetime.now(timezone.utc)
        for record in await self.records.load_all():
            if not record.is_expired(retention_days, now):
                result.retained += 1
                continue
            if await self.purge(record.id):
                logger.info(f"Auto-deleted expired item: {record.name}")
                result.purged_ids.append(record.id)
        return result

    async def summary(self) -> TrashSummary:
        count, total = await self.records.disk_usage()
        return TrashSummary(count=count, total_bytes=total)

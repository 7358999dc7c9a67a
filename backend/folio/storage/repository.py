"""
One directory of slot files for one entity kind.

Storage layout:
    {directory}/
        {entity_id}{extension}      # one encoded record per entity
        quarantine/
            {entity_id}{extension}  # records that failed to decode, kept verbatim

The directory listing is the index: there is no manifest, so the first bulk
read decodes every slot. Blocking filesystem work runs in worker threads.
"""

import asyncio
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel

from folio.errors import CorruptionError, IntegrityViolation, NotFoundError
from folio.logging import get_logger
from folio.storage.atomic import clear_stale_temp_files, read_slot, remove_slot, write_atomic
from folio.storage.cache import RecordCache
from folio.storage.codec import RecordCodec

logger = get_logger("storage.repository")

QUARANTINE_DIRNAME = "quarantine"

_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")

T = TypeVar("T", bound=BaseModel)


class RecordRepository(Generic[T]):
    """Slot files + record cache for a single entity kind."""

    def __init__(
        self,
        directory: Path,
        extension: str,
        codec: RecordCodec[T],
        durable: bool = True,
    ):
        self.directory = Path(directory)
        self.extension = extension
        self.codec = codec
        self.durable = durable
        self.quarantine_dir = self.directory / QUARANTINE_DIRNAME
        self.cache: RecordCache[T] = RecordCache()
        self._slot_locks: dict[str, asyncio.Lock] = {}
        self._lock_guard = asyncio.Lock()

        self.directory.mkdir(parents=True, exist_ok=True)
        clear_stale_temp_files(self.directory)

    @property
    def kind(self) -> str:
        return self.codec.kind

    def slot_path(self, entity_id: str) -> Path:
        if not _ID_PATTERN.match(entity_id):
            raise NotFoundError(f"Invalid {self.kind} id: {entity_id!r}", id=entity_id, kind=self.kind)
        return self.directory / f"{entity_id}{self.extension}"

    async def _get_slot_lock(self, entity_id: str) -> asyncio.Lock:
        async with self._lock_guard:
            lock = self._slot_locks.get(entity_id)
            if lock is None:
                lock = asyncio.Lock()
                self._slot_locks[entity_id] = lock
            return lock

    async def save(self, entity: T) -> T:
        """
        Encode, write atomically, then update the cache.

        On an encode or write failure the cache is left untouched.
        """
        entity_id = entity.id
        if not _ID_PATTERN.match(entity_id):
            raise IntegrityViolation(f"Invalid {self.kind} id: {entity_id!r}", id=entity_id)
        data = self.codec.encode(entity)
        path = self.slot_path(entity_id)
        lock = await self._get_slot_lock(entity_id)
        async with lock:
            await asyncio.to_thread(write_atomic, path, data, self.durable)
            await self.cache.put(entity_id, entity)
        return entity.model_copy(deep=True)

    async def load(self, entity_id: str) -> T:
        """
        Return a copy of one entity, reading its slot on a cache miss.

        :raises NotFoundError: If there is no such slot
        :raises CorruptionError: If the slot does not decode; the file is quarantined
        """
        cached = await self.cache.get(entity_id)
        if cached is not None:
            return cached

        path = self.slot_path(entity_id)
        lock = await self._get_slot_lock(entity_id)
        async with lock:
            cached = await self.cache.get(entity_id)
            if cached is not None:
                return cached
            try:
                data = await asyncio.to_thread(read_slot, path)
            except NotFoundError:
                raise NotFoundError(f"{self.kind.capitalize()} {entity_id} not found", id=entity_id, kind=self.kind)
            try:
                entity = self._decode_slot(data, entity_id)
            except CorruptionError as e:
                logger.error(f"Failed to load {self.kind} {entity_id}: {e.message}")
                moved_to = await asyncio.to_thread(self._quarantine, path)
                raise CorruptionError(
                    e.message,
                    identifier=entity_id,
                    path=str(moved_to or path),
                    kind=self.kind,
                ) from e
            return await self.cache.put_if_absent(entity_id, entity)

    async def load_all(self) -> list[T]:
        """Return copies of every entity, scanning the directory on first use."""
        await self.cache.populate(self._scan)
        return await self.cache.all_values()

    async def remove(self, entity_id: str) -> bool:
        """
        Delete a slot and its cache entry. Removing a missing entity is a no-op.

        :return: True if anything was removed
        :rtype: bool
        """
        path = self.slot_path(entity_id)
        lock = await self._get_slot_lock(entity_id)
        async with lock:
            removed = await asyncio.to_thread(remove_slot, path)
            evicted = await self.cache.remove(entity_id)
        return removed or evicted

    async def exists(self, entity_id: str) -> bool:
        if await self.cache.get(entity_id) is not None:
            return True
        try:
            path = self.slot_path(entity_id)
        except NotFoundError:
            return False
        return await asyncio.to_thread(path.exists)

    async def disk_usage(self) -> Tuple[int, int]:
        """Count and total size in bytes of the slot files on disk."""
        return await asyncio.to_thread(self._disk_usage)

    async def _scan(self) -> list[Tuple[str, T]]:
        return await asyncio.to_thread(self._scan_sync)

    def _scan_sync(self) -> list[Tuple[str, T]]:
        loaded: list[Tuple[str, T]] = []
        quarantined = 0
        for path in sorted(self.directory.glob(f"*{self.extension}")):
            if not path.is_file():
                continue
            try:
                data = read_slot(path)
            except NotFoundError:
                # Deleted between listing and reading
                continue
            try:
                entity = self._decode_slot(data, path.name[: -len(self.extension)])
            except CorruptionError as e:
                logger.warning(f"Corrupted {self.kind} file: {path.name} - {e.message}")
                self._quarantine(path)
                quarantined += 1
                continue
            loaded.append((entity.id, entity))
        logger.info(
            f"Loaded {len(loaded)} {self.kind} record(s) from {self.directory}"
            + (f", quarantined {quarantined}" if quarantined else "")
        )
        return loaded

    def _decode_slot(self, data: bytes, entity_id: str) -> T:
        entity = self.codec.decode(data, entity_id)
        if entity.id != entity_id:
            raise CorruptionError(
                f"Slot {entity_id}{self.extension} holds {self.kind} {entity.id}",
                identifier=entity_id,
                stored_id=entity.id,
            )
        return entity

    def _quarantine(self, path: Path) -> Optional[Path]:
        """Move an undecodable slot aside, keeping its bytes and name."""
        try:
            self.quarantine_dir.mkdir(parents=True, exist_ok=True)
            target = self.quarantine_dir / path.name
            if target.exists():
                stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
                target = self.quarantine_dir / f"{path.name}.{stamp}"
            os.replace(path, target)
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Failed to quarantine corrupted file {path.name}: {e}")
            return None
        logger.info(f"Moved corrupted file to: {target}")
        return target

    def _disk_usage(self) -> Tuple[int, int]:
        count = 0
        total = 0
        for path in self.directory.glob(f"*{self.extension}"):
            try:
                total += path.stat().st_size
                count += 1
            except FileNotFoundError:
                continue
        return count, total

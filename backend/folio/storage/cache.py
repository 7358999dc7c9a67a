"""
In-memory record cache guarded by a single reader/writer lock.

Values are whole-entity snapshots: they are deep-copied on the way in and on
the way out, so no caller ever holds a reference into the cache.
"""

from typing import Awaitable, Callable, Dict, Generic, Iterable, Optional, Tuple, TypeVar

from pydantic import BaseModel

from folio.storage.locking import ReadWriteLock

T = TypeVar("T", bound=BaseModel)


class RecordCache(Generic[T]):
    """Identity-keyed entity cache with lazy, once-only bulk population."""

    def __init__(self):
        self._entries: Dict[str, T] = {}
        self._lock = ReadWriteLock()
        self._warmed = False

    @property
    def warmed(self) -> bool:
        """True once a full bulk load has completed."""
        return self._warmed

    async def get(self, entity_id: str) -> Optional[T]:
        async with self._lock.read():
            entity = self._entries.get(entity_id)
            return entity.model_copy(deep=True) if entity is not None else None

    async def put(self, entity_id: str, entity: T) -> None:
        snapshot = entity.model_copy(deep=True)
        async with self._lock.write():
            self._entries[entity_id] = snapshot

    async def put_if_absent(self, entity_id: str, entity: T) -> T:
        """Insert unless a value is already cached; return the cached value."""
        snapshot = entity.model_copy(deep=True)
        async with self._lock.write():
            current = self._entries.setdefault(entity_id, snapshot)
            return current.model_copy(deep=True)

    async def remove(self, entity_id: str) -> bool:
        async with self._lock.write():
            return self._entries.pop(entity_id, None) is not None

    async def all_values(self) -> list[T]:
        async with self._lock.read():
            return [entity.model_copy(deep=True) for entity in self._entries.values()]

    async def is_empty(self) -> bool:
        async with self._lock.read():
            return not self._entries

    async def populate(self, loader: Callable[[], Awaitable[Iterable[Tuple[str, T]]]]) -> bool:
        """
        Run ``loader`` once and merge its results, holding the exclusive lock.

        Entries already cached win over loaded ones: they came from a save or
        a point read that is at least as new as the scan.

        :param loader: Coroutine function returning ``(id, entity)`` pairs
        :return: True if this call performed the load, False if already warm
        :rtype: bool
        """
        if self._warmed:
            return False
        async with self._lock.write():
            if self._warmed:
                return False
            for entity_id, entity in await loader():
                self._entries.setdefault(entity_id, entity)
            self._warmed = True
            return True

    async def invalidate(self) -> None:
        """Drop every entry; the next bulk read rescans the disk."""
        async with self._lock.write():
            self._entries.clear()
            self._warmed = False

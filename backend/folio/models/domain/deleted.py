"""Deleted record domain model."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from folio.models.domain.geometry import Blob
from folio.models.enums import EntityKind


class DeletedRecord(BaseModel):
    """A soft-deleted document or folder, retained as a serialized snapshot."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    original_id: str
    name: str
    kind: EntityKind
    deleted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: Blob
    # Where the entity lived before deletion; informational only.
    parent_folder_id: Optional[str] = None

    def is_expired(self, retention_days: Optional[int], now: Optional[datetime] = None) -> bool:
        """
        Check whether the record has outlived the retention window.

        :param retention_days: Days to keep deleted items, or None to keep forever
        :type retention_days: Optional[int]
        :param now: Reference time, defaults to the current UTC time
        :type now: Optional[datetime]
        :return: True once at least ``retention_days`` full days have elapsed
        :rtype: bool
        """
        if retention_days is None:
            return False
        now = now or datetime.now(timezone.utc)
        deleted_at = self.deleted_at
        if deleted_at.tzinfo is None:
            deleted_at = deleted_at.replace(tzinfo=timezone.utc)
        return now - deleted_at >= timedelta(days=retention_days)

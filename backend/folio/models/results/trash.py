"""
Result models for trash operations.
"""

from pydantic import BaseModel, Field
from typing import Optional


class SweepResult(BaseModel):
    """Outcome of one expiry sweep."""
    retention_days: Optional[int] = None
    purged_ids: list[str] = Field(default_factory=list)
    retained: int = 0


class TrashSummary(BaseModel):
    """Size statistics of the trash."""
    count: int
    total_bytes: int

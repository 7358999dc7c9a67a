"""
Result models for store operations.
"""

from pydantic import BaseModel, Field


class DeleteResult(BaseModel):
    """Outcome of a (possibly cascading) delete."""
    permanent: bool
    deleted_ids: list[str] = Field(default_factory=list)
    trash_record_ids: list[str] = Field(default_factory=list)

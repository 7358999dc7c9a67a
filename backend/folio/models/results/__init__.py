"""Result models for service operations."""

from folio.models.results.store import DeleteResult
from folio.models.results.trash import SweepResult, TrashSummary

__all__ = ["DeleteResult", "SweepResult", "TrashSummary"]

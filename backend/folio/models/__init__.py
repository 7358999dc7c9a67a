"""
Folio models.

Usage:
    from folio.models import Document, Folder, Page, DeletedRecord
    from folio.models import EntityKind, PageTemplate, PageSize
    from folio.models import SweepResult, TrashSummary, DeleteResult
"""

# --- Enums ---
from folio.models.enums import EntityKind, PageTemplate, PageSize, ShapeType

# --- Domain models ---
from folio.models.domain import (
    Blob, Point, Size, Rect, Color,
    TextAnnotation, ImageAnnotation, ShapeAnnotation,
    Drawing, Stroke,
    Page,
    Document, DocumentCreate, DocumentUpdate, PageCreate,
    Folder, FolderCreate, FolderUpdate, MoveRequest,
    DeletedRecord,
    StoreItem, store_item_adapter,
)

# --- Result models ---
from folio.models.results import DeleteResult, SweepResult, TrashSummary

__all__ = [
    # Enums
    "EntityKind", "PageTemplate", "PageSize", "ShapeType",
    # Domain
    "Blob", "Point", "Size", "Rect", "Color",
    "TextAnnotation", "ImageAnnotation", "ShapeAnnotation",
    "Drawing", "Stroke",
    "Page",
    "Document", "DocumentCreate", "DocumentUpdate", "PageCreate",
    "Folder", "FolderCreate", "FolderUpdate", "MoveRequest",
    "DeletedRecord",
    "StoreItem", "store_item_adapter",
    # Results
    "DeleteResult", "SweepResult", "TrashSummary",
]

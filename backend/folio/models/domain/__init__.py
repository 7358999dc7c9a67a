"""Domain models - documents, folders, pages and deleted records."""

from folio.models.domain.geometry import Blob, Point, Size, Rect, Color
from folio.models.domain.annotation import TextAnnotation, ImageAnnotation, ShapeAnnotation
from folio.models.domain.drawing import Drawing, Stroke
from folio.models.domain.page import Page
from folio.models.domain.document import Document, DocumentCreate, DocumentUpdate, PageCreate
from folio.models.domain.folder import Folder, FolderCreate, FolderUpdate, MoveRequest
from folio.models.domain.deleted import DeletedRecord
from folio.models.domain.item import StoreItem, store_item_adapter

__all__ = [
    "Blob", "Point", "Size", "Rect", "Color",
    "TextAnnotation", "ImageAnnotation", "ShapeAnnotation",
    "Drawing", "Stroke",
    "Page",
    "Document", "DocumentCreate", "DocumentUpdate", "PageCreate",
    "Folder", "FolderCreate", "FolderUpdate", "MoveRequest",
    "DeletedRecord",
    "StoreItem", "store_item_adapter",
]

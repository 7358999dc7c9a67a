"""
Enum definitions for the Folio store.
"""
from enum import Enum


class EntityKind(str, Enum):
    """Discriminant of the two live entity kinds."""
    DOCUMENT = "document"
    FOLDER = "folder"


class PageTemplate(str, Enum):
    """Background drawn behind a page."""
    BLANK = "blank"
    GRID = "grid"
    DOTTED = "dotted"
    LINED = "lined"


class PageSize(str, Enum):
    """Page-size policy of a document."""
    A4 = "a4"

    @property
    def dimensions(self) -> tuple[float, float]:
        """Width and height in points (72 DPI)."""
        return _PAGE_DIMENSIONS[self]

    @property
    def display_name(self) -> str:
        return self.value.upper()


_PAGE_DIMENSIONS = {
    PageSize.A4: (595.0, 842.0),
}


class ShapeType(str, Enum):
    """Geometry of a shape annotation."""
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    LINE = "line"
    ARROW = "arrow"
    TRIANGLE = "triangle"

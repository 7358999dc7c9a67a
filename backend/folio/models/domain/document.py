"""Document (note) domain model."""

from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional
from datetime import datetime, timezone
from uuid import uuid4

from folio.errors import IntegrityViolation
from folio.models.domain.drawing import Drawing
from folio.models.domain.page import Page
from folio.models.enums import PageSize, PageTemplate


def _now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentCreate(BaseModel):
    """Payload for creating a document."""
    name: str = Field(min_length=1)
    parent_folder_id: Optional[str] = None
    template: Optional[PageTemplate] = None
    page_size: PageSize = PageSize.A4


class DocumentUpdate(BaseModel):
    """Payload for updating a document. Only provided fields are patched."""
    name: Optional[str] = Field(default=None, min_length=1)
    page_size: Optional[PageSize] = None


class PageCreate(BaseModel):
    """Payload for appending a page."""
    template: Optional[PageTemplate] = None


class Document(BaseModel):
    """A note: an ordered, never-empty sequence of pages inside a folder or the root."""
    kind: Literal["document"] = "document"
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    pages: list[Page] = Field(default_factory=lambda: [Page()])
    parent_folder_id: Optional[str] = None
    page_size: PageSize = PageSize.A4
    created_at: datetime = Field(default_factory=_now)
    modified_at: datetime = Field(default_factory=_now)

    @field_validator("pages")
    @classmethod
    def pages_not_empty(cls, pages: list[Page]) -> list[Page]:
        if not pages:
            raise ValueError("a document must have at least one page")
        return pages

    @property
    def thumbnail_data(self) -> Optional[bytes]:
        return self.pages[0].thumbnail if self.pages else None

    def touch(self) -> None:
        self.modified_at = _now()

    def page_index(self, page_id: str) -> int:
        for index, page in enumerate(self.pages):
            if page.id == page_id:
                return index
        raise IntegrityViolation(
            f"Page {page_id} does not belong to document {self.id}",
            document_id=self.id,
            page_id=page_id,
        )

    def add_page(self, template: PageTemplate = PageTemplate.BLANK) -> Page:
        page = Page(template=template)
        self.pages.append(page)
        self.touch()
        return page

    def delete_page(self, index: int) -> Page:
        if not 0 <= index < len(self.pages):
            raise IntegrityViolation(
                f"Page index {index} out of range",
                document_id=self.id,
                index=index,
            )
        if len(self.pages) == 1:
            raise IntegrityViolation(
                "Cannot delete the last page of a document",
                document_id=self.id,
            )
        page = self.pages.pop(index)
        self.touch()
        return page

    def update_page(self, index: int, drawing: Drawing) -> None:
        if not 0 <= index < len(self.pages):
            raise IntegrityViolation(
                f"Page index {index} out of range",
                document_id=self.id,
                index=index,
            )
        self.pages[index].set_drawing(drawing)
        self.touch()

    def set_thumbnail(self, index: int, data: Optional[bytes]) -> None:
        if not 0 <= index < len(self.pages):
            raise IntegrityViolation(
                f"Page index {index} out of range",
                document_id=self.id,
                index=index,
            )
        self.pages[index].thumbnail = data
        self.touch()

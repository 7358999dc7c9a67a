"""Page domain model."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4

from folio.models.domain.annotation import ImageAnnotation, ShapeAnnotation, TextAnnotation
from folio.models.domain.drawing import Drawing
from folio.models.domain.geometry import Blob
from folio.models.enums import PageTemplate


class Page(BaseModel):
    """A single page: raw drawing payload, cached thumbnail and annotations."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    drawing_data: Blob = b""
    thumbnail: Optional[Blob] = None
    template: PageTemplate = PageTemplate.BLANK
    text_annotations: list[TextAnnotation] = Field(default_factory=list)
    image_annotations: list[ImageAnnotation] = Field(default_factory=list)
    shape_annotations: list[ShapeAnnotation] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    modified_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def drawing(self) -> Drawing:
        """
        Decode the drawing payload.

        A payload that fails to decode yields an empty drawing instead of an error.
        """
        from folio.storage.drawing import decode_drawing

        return decode_drawing(self.drawing_data, page_id=self.id)

    def set_drawing(self, drawing: Drawing) -> None:
        from folio.storage.drawing import encode_drawing

        self.drawing_data = encode_drawing(drawing)
        self.modified_at = datetime.now(timezone.utc)

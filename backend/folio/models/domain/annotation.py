"""Annotation value types placed on top of a page drawing."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4

from folio.models.domain.geometry import Blob, Color, Point, Rect, Size
from folio.models.enums import ShapeType


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TextAnnotation(BaseModel):
    """A free-form text box."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str
    position: Point
    font_size: float = 17.0
    font_name: str = "Helvetica"
    color: Color = Field(default_factory=Color)
    width: float = 200.0
    created_at: datetime = Field(default_factory=_now)
    modified_at: datetime = Field(default_factory=_now)


class ImageAnnotation(BaseModel):
    """An embedded image, stored as encoded image bytes."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    image_data: Blob
    position: Point
    size: Size
    rotation: float = 0.0  # radians
    created_at: datetime = Field(default_factory=_now)
    modified_at: datetime = Field(default_factory=_now)


class ShapeAnnotation(BaseModel):
    """A vector shape spanning two points."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    type: ShapeType
    start_point: Point
    end_point: Point
    stroke_color: Color = Field(default_factory=Color)
    fill_color: Optional[Color] = None
    line_width: float = 2.0
    created_at: datetime = Field(default_factory=_now)
    modified_at: datetime = Field(default_factory=_now)

    @property
    def bounds(self) -> Rect:
        return Rect(
            origin=Point(
                x=min(self.start_point.x, self.end_point.x),
                y=min(self.start_point.y, self.end_point.y),
            ),
            size=Size(
                width=abs(self.end_point.x - self.start_point.x),
                height=abs(self.end_point.y - self.start_point.y),
            ),
        )

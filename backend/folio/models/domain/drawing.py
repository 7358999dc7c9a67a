"""Decoded form of a page's drawing payload."""

from pydantic import BaseModel, Field

from folio.models.domain.geometry import Color, Point


class Stroke(BaseModel):
    """One continuous pen, pencil or marker stroke."""
    tool: str = "pen"
    color: Color = Field(default_factory=Color)
    width: float = 2.0
    points: list[Point] = Field(default_factory=list)


class Drawing(BaseModel):
    strokes: list[Stroke] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.strokes

"""Folder (container) domain model."""

from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime, timezone
from uuid import uuid4


COLOR_HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class FolderCreate(BaseModel):
    """Payload for creating a folder."""
    name: str = Field(min_length=1)
    parent_folder_id: Optional[str] = None
    color_hex: Optional[str] = Field(default=None, pattern=COLOR_HEX_PATTERN)


class FolderUpdate(BaseModel):
    """Payload for updating a folder. Only provided fields are patched."""
    name: Optional[str] = Field(default=None, min_length=1)
    color_hex: Optional[str] = Field(default=None, pattern=COLOR_HEX_PATTERN)
    clear_color: bool = False


class MoveRequest(BaseModel):
    """Payload for reparenting a document or folder. None moves it to the root."""
    parent_folder_id: Optional[str] = None


class Folder(BaseModel):
    """A container node in the folder tree."""
    kind: Literal["folder"] = "folder"
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    parent_folder_id: Optional[str] = None
    color_hex: Optional[str] = Field(default=None, pattern=COLOR_HEX_PATTERN)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    modified_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.modified_at = datetime.now(timezone.utc)

"""Geometry and style values shared by pages and annotations."""

import base64
import binascii
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer


def _decode_blob(value):
    if isinstance(value, str):
        try:
            return base64.b64decode(value.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise ValueError(f"invalid base64 payload: {e}")
    return value


def _encode_blob(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


# Raw bytes in Python, base64 text in JSON.
Blob = Annotated[
    bytes,
    BeforeValidator(_decode_blob),
    PlainSerializer(_encode_blob, return_type=str, when_used="json"),
]


class Point(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Size(BaseModel):
    width: float = 0.0
    height: float = 0.0


class Rect(BaseModel):
    origin: Point = Field(default_factory=Point)
    size: Size = Field(default_factory=Size)


class Color(BaseModel):
    """RGBA color with components in [0, 1]. Defaults to opaque black."""
    red: float = Field(default=0.0, ge=0.0, le=1.0)
    green: float = Field(default=0.0, ge=0.0, le=1.0)
    blue: float = Field(default=0.0, ge=0.0, le=1.0)
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)

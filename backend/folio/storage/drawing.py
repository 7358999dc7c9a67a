"""
Binary format of page drawing payloads.

Layout: ``FDRW`` magic, one format-version byte, then zlib-compressed
canonical JSON of the strokes. Drawings are recoverable-quality data, so a
payload that fails to decode is reported and replaced by an empty drawing
rather than failing the document that contains it.
"""

import json
import zlib
from typing import Optional

from pydantic import ValidationError

from folio.logging import get_logger
from folio.models.domain.drawing import Drawing

logger = get_logger("storage.drawing")

DRAWING_MAGIC = b"FDRW"
DRAWING_VERSION = 1


def encode_drawing(drawing: Drawing) -> bytes:
    """
    Serialize a drawing. An empty drawing encodes to empty bytes.

    :param drawing: Drawing to encode
    :type drawing: Drawing
    :return: Encoded payload
    :rtype: bytes
    """
    if drawing.is_empty:
        return b""
    body = json.dumps(
        drawing.model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
    ).encode("utf-8")
    return DRAWING_MAGIC + bytes([DRAWING_VERSION]) + zlib.compress(body)


def decode_drawing(data: bytes, page_id: Optional[str] = None) -> Drawing:
    """
    Deserialize a drawing payload, degrading to an empty drawing on corruption.

    :param data: Raw payload bytes
    :type data: bytes
    :param page_id: Owning page, used only for logging
    :type page_id: Optional[str]
    :return: Decoded drawing, or an empty one
    :rtype: Drawing
    """
    if not data:
        return Drawing()

    header_len = len(DRAWING_MAGIC) + 1
    if len(data) < header_len or not data.startswith(DRAWING_MAGIC):
        logger.warning(
            f"Unrecognized drawing payload for page {page_id} ({len(data)} bytes), using empty drawing"
        )
        return Drawing()

    version = data[len(DRAWING_MAGIC)]
    if version > DRAWING_VERSION:
        logger.warning(f"Drawing for page {page_id} uses newer format v{version}, using empty drawing")
        return Drawing()

    try:
        body = zlib.decompress(data[header_len:])
        return Drawing.model_validate(json.loads(body.decode("utf-8")))
    except (zlib.error, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(
            f"Failed to load drawing for page {page_id} ({len(data)} bytes): {e} - using empty drawing"
        )
        return Drawing()

# tests/test_drawing.py
import zlib

from folio.models import Color, Drawing, Page, Point, Stroke
from folio.storage.drawing import DRAWING_MAGIC, DRAWING_VERSION, decode_drawing, encode_drawing


def _drawing() -> Drawing:
    return Drawing(strokes=[
        Stroke(tool="marker", color=Color(blue=1.0), width=8.0, points=[Point(x=0, y=0), Point(x=9, y=9)]),
        Stroke(points=[Point(x=1.5, y=2.5)]),
    ])


def test_roundtrip():
    drawing = _drawing()
    data = encode_drawing(drawing)
    assert data.startswith(DRAWING_MAGIC)
    assert decode_drawing(data) == drawing


def test_empty_drawing_is_empty_bytes():
    assert encode_drawing(Drawing()) == b""
    assert decode_drawing(b"").is_empty


def test_corrupted_payloads_degrade_to_empty():
    data = encode_drawing(_drawing())
    assert decode_drawing(b"garbage bytes", "p1").is_empty
    assert decode_drawing(data[:-4], "p1").is_empty
    assert decode_drawing(DRAWING_MAGIC + bytes([DRAWING_VERSION]) + zlib.compress(b"{not json"), "p1").is_empty
    assert decode_drawing(DRAWING_MAGIC + bytes([DRAWING_VERSION]) + zlib.compress(b'{"strokes": 5}'), "p1").is_empty


def test_newer_format_version_degrades_to_empty():
    data = bytearray(encode_drawing(_drawing()))
    data[len(DRAWING_MAGIC)] = DRAWING_VERSION + 1
    assert decode_drawing(bytes(data)).is_empty


def test_page_with_corrupt_drawing_still_loads():
    page = Page(drawing_data=b"\x00\x01\x02")
    assert page.drawing().is_empty

    page.set_drawing(_drawing())
    assert len(page.drawing().strokes) == 2

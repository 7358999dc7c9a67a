# tests/test_codec.py
import json

import pytest

from folio.errors import CorruptionError, IntegrityViolation
from folio.models import (
    Color,
    Document,
    Drawing,
    EntityKind,
    Folder,
    ImageAnnotation,
    Point,
    ShapeAnnotation,
    ShapeType,
    Size,
    Stroke,
    TextAnnotation,
)
from folio.storage.codec import (
    DELETED_RECORD_CODEC,
    DOCUMENT_CODEC,
    FOLDER_CODEC,
    compute_checksum,
    decode_snapshot,
)
from tests.conftest import make_deleted_record


def _rich_document() -> Document:
    doc = Document(name="Physics", parent_folder_id="folder-1")
    doc.add_page()
    page = doc.pages[0]
    page.set_drawing(Drawing(strokes=[Stroke(points=[Point(x=1, y=2), Point(x=3, y=4)])]))
    page.thumbnail = b"\x89PNG\r\n\x1a\n"
    page.text_annotations.append(TextAnnotation(text="F = ma", position=Point(x=10, y=20)))
    page.image_annotations.append(
        ImageAnnotation(image_data=b"\xff\xd8\xff", position=Point(), size=Size(width=64, height=48))
    )
    page.shape_annotations.append(
        ShapeAnnotation(
            type=ShapeType.ARROW,
            start_point=Point(x=0, y=0),
            end_point=Point(x=5, y=5),
            fill_color=Color(red=1.0, alpha=0.5),
        )
    )
    return doc


def test_document_roundtrip_preserves_everything():
    doc = _rich_document()
    decoded = DOCUMENT_CODEC.decode(DOCUMENT_CODEC.encode(doc), doc.id)
    assert decoded == doc
    assert decoded.pages[0].drawing().strokes[0].points[1].x == 3
    assert decoded.thumbnail_data == b"\x89PNG\r\n\x1a\n"


def test_folder_and_deleted_record_roundtrip():
    folder = Folder(name="Coursework", color_hex="#336699")
    assert FOLDER_CODEC.decode(FOLDER_CODEC.encode(folder)) == folder

    record = make_deleted_record(3)
    decoded = DELETED_RECORD_CODEC.decode(DELETED_RECORD_CODEC.encode(record))
    assert decoded == record
    snapshot = decode_snapshot(EntityKind.DOCUMENT, decoded.data, decoded.original_id)
    assert snapshot.id == record.original_id


def test_encoding_is_deterministic():
    doc = _rich_document()
    assert DOCUMENT_CODEC.encode(doc) == DOCUMENT_CODEC.encode(doc.model_copy(deep=True))


def test_encode_rejects_wrong_model():
    with pytest.raises(TypeError):
        DOCUMENT_CODEC.encode(Folder(name="Not a document"))


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"\xff\xfe\x00",
        b"not json at all",
        b"[1, 2, 3]",
        b'{"format": "something.else", "kind": "document"}',
    ],
)
def test_garbage_raises_corruption_error(payload):
    with pytest.raises(CorruptionError) as excinfo:
        DOCUMENT_CODEC.decode(payload, "broken-id")
    assert excinfo.value.identifier == "broken-id"


def test_truncated_bytes_raise_corruption_error():
    data = DOCUMENT_CODEC.encode(_rich_document())
    for cut in (1, len(data) // 2, len(data) - 1):
        with pytest.raises(CorruptionError):
            DOCUMENT_CODEC.decode(data[:cut], "truncated")


def test_checksum_mismatch_is_detected():
    doc = Document(name="Original")
    envelope = json.loads(DOCUMENT_CODEC.encode(doc))
    envelope["record"]["name"] = "Tampered"
    with pytest.raises(CorruptionError) as excinfo:
        DOCUMENT_CODEC.decode(json.dumps(envelope).encode(), doc.id)
    assert "Checksum" in excinfo.value.message


def test_wrong_kind_is_rejected():
    data = FOLDER_CODEC.encode(Folder(name="Folder"))
    with pytest.raises(CorruptionError):
        DOCUMENT_CODEC.decode(data, "folder-bytes")


def test_schema_mismatch_is_corruption():
    record = {"kind": "document", "id": "abc", "pages": []}
    envelope = {
        "checksum": compute_checksum(record),
        "format": "folio.record",
        "kind": "document",
        "record": record,
        "version": 1,
    }
    with pytest.raises(CorruptionError):
        DOCUMENT_CODEC.decode(json.dumps(envelope).encode(), "abc")


def test_unknown_fields_are_ignored():
    folder = Folder(name="Forward compatible")
    envelope = json.loads(FOLDER_CODEC.encode(folder))
    envelope["record"]["added_in_a_later_release"] = {"x": 1}
    envelope["checksum"] = compute_checksum(envelope["record"])
    decoded = FOLDER_CODEC.decode(json.dumps(envelope).encode())
    assert decoded == folder


def test_checksum_is_truncated_sha256():
    assert len(compute_checksum({"a": 1})) == 16
    assert len(compute_checksum({"a": 1}, truncate=0)) == 64
    assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})


def test_encode_rejects_entity_that_no_longer_validates():
    doc = Document(name="Edited in place")
    doc.pages.clear()
    with pytest.raises(IntegrityViolation):
        DOCUMENT_CODEC.encode(doc)

    folder = Folder(name="Edited in place")
    folder.color_hex = "#12345"
    with pytest.raises(IntegrityViolation):
        FOLDER_CODEC.encode(folder)

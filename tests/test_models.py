# tests/test_models.py
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from folio.errors import IntegrityViolation
from folio.models import (
    Document,
    Folder,
    PageSize,
    PageTemplate,
    Point,
    ShapeAnnotation,
    ShapeType,
    store_item_adapter,
)
from tests.conftest import make_deleted_record


def test_new_document_has_exactly_one_blank_page():
    doc = Document(name="Lecture")
    assert len(doc.pages) == 1
    assert doc.pages[0].template == PageTemplate.BLANK
    assert doc.pages[0].drawing_data == b""
    assert doc.parent_folder_id is None


def test_document_rejects_empty_pages():
    with pytest.raises(ValidationError):
        Document(name="Empty", pages=[])


def test_last_page_cannot_be_deleted():
    doc = Document(name="One page")
    before = doc.modified_at
    with pytest.raises(IntegrityViolation):
        doc.delete_page(0)
    assert len(doc.pages) == 1
    assert doc.modified_at == before


def test_add_and_delete_pages():
    doc = Document(name="Pages")
    second = doc.add_page(PageTemplate.GRID)
    assert [p.template for p in doc.pages] == [PageTemplate.BLANK, PageTemplate.GRID]

    removed = doc.delete_page(0)
    assert doc.pages == [second]
    assert removed.template == PageTemplate.BLANK

    with pytest.raises(IntegrityViolation):
        doc.delete_page(5)


def test_thumbnail_comes_from_first_page():
    doc = Document(name="Thumb")
    doc.add_page()
    doc.set_thumbnail(1, b"second")
    assert doc.thumbnail_data is None
    doc.set_thumbnail(0, b"\x89PNG")
    assert doc.thumbnail_data == b"\x89PNG"


def test_unknown_page_id_is_an_integrity_violation():
    doc = Document(name="Lookup")
    assert doc.page_index(doc.pages[0].id) == 0
    with pytest.raises(IntegrityViolation):
        doc.page_index("nope")


def test_folder_color_must_be_hex():
    assert Folder(name="Red", color_hex="#FF0000").color_hex == "#FF0000"
    with pytest.raises(ValidationError):
        Folder(name="Bad", color_hex="red")


def test_shape_bounds_normalize_corners():
    shape = ShapeAnnotation(
        type=ShapeType.RECTANGLE,
        start_point=Point(x=50, y=10),
        end_point=Point(x=20, y=40),
    )
    bounds = shape.bounds
    assert (bounds.origin.x, bounds.origin.y) == (20, 10)
    assert (bounds.size.width, bounds.size.height) == (30, 30)


def test_page_size_dimensions():
    assert PageSize.A4.dimensions == (595.0, 842.0)
    assert PageSize.A4.display_name == "A4"


def test_store_item_union_dispatches_on_kind():
    doc = Document(name="Doc")
    folder = Folder(name="Dir")
    assert isinstance(store_item_adapter.validate_python(doc.model_dump()), Document)
    assert isinstance(store_item_adapter.validate_python(folder.model_dump()), Folder)


def test_retention_boundaries():
    now = datetime.now(timezone.utc)
    assert make_deleted_record(31).is_expired(30, now)
    assert not make_deleted_record(29).is_expired(30, now)
    assert not make_deleted_record(31).is_expired(None, now)
    fresh = make_deleted_record(0)
    assert fresh.is_expired(0, datetime.now(timezone.utc))


def test_retention_treats_naive_timestamps_as_utc():
    record = make_deleted_record(0)
    record.deleted_at = (datetime.now(timezone.utc) - timedelta(days=2)).replace(tzinfo=None)
    assert record.is_expired(1)

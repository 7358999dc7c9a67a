# tests/conftest.py
import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from folio.models import DeletedRecord, Document, EntityKind
from folio.services.store import DocumentStore
from folio.services.trash import TrashService
from folio.storage.codec import DOCUMENT_CODEC


@pytest.fixture()
def storage_root(tmp_path):
    return tmp_path / "storage"


@pytest.fixture()
def trash(storage_root):
    return TrashService(storage_root, durable=False)


@pytest.fixture()
def store(storage_root, trash):
    return DocumentStore(storage_root, trash=trash, durable=False)


@pytest.fixture()
def run():
    """Drive one async scenario to completion on a fresh event loop."""
    return asyncio.run


def make_deleted_record(days_ago: float, name: str = "old note") -> DeletedRecord:
    document = Document(name=name)
    return DeletedRecord(
        original_id=document.id,
        name=document.name,
        kind=EntityKind.DOCUMENT,
        deleted_at=datetime.now(timezone.utc) - timedelta(days=days_ago),
        data=DOCUMENT_CODEC.encode(document),
    )

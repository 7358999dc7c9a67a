"""
Record codec: entities to checksummed bytes and back.

Each slot holds one JSON envelope::

    {
        "checksum": "<sha256 of the canonical record, 16 hex chars>",
        "format": "folio.record",
        "kind": "document" | "folder" | "deleted",
        "record": {...},
        "version": 1
    }

Keys are sorted and separators compact, so encoding the same value twice
gives identical bytes. Readers ignore record fields they do not know, which
keeps older readers working when fields are added.
"""

import hashlib
import json
from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from folio.errors import CorruptionError, IntegrityViolation
from folio.models import DeletedRecord, Document, EntityKind, Folder

RECORD_FORMAT = "folio.record"
RECORD_VERSION = 1
DELETED_KIND = "deleted"

T = TypeVar("T", bound=BaseModel)


def _canonical(data: Dict[str, Any]) -> bytes:
    return json.dumps(data, sort_keys=True, separators=(",", ":")).encode("utf-8")


def compute_checksum(data: Dict[str, Any], truncate: int = 16) -> str:
    """
    Compute the SHA256 checksum of a record dictionary.

    :param data: Record dictionary, serialized with sorted keys
    :type data: Dict[str, Any]
    :param truncate: Number of hex characters to keep (0 keeps all 64)
    :type truncate: int
    :return: Hex digest
    :rtype: str
    """
    digest = hashlib.sha256(_canonical(data)).hexdigest()
    if truncate and truncate > 0:
        return digest[:truncate]
    return digest


class RecordCodec(Generic[T]):
    """Encode and decode one model type inside a checksummed envelope."""

    def __init__(self, model_type: Type[T], kind: str):
        self.model_type = model_type
        self.kind = kind

    def encode(self, entity: T) -> bytes:
        """
        Validate and encode one entity.

        :raises TypeError: If ``entity`` is not an instance of the codec's model
        :raises IntegrityViolation: If the entity no longer satisfies its schema
        """
        if not isinstance(entity, self.model_type):
            raise TypeError(
                f"{self.kind} codec cannot encode {type(entity).__name__}"
            )
        record = json.loads(entity.model_dump_json())
        try:
            # Assignment and list edits bypass validation; re-check before writing.
            self.model_type.model_validate_json(_canonical(record))
        except ValidationError as e:
            raise IntegrityViolation(
                f"Refusing to store invalid {self.kind} {getattr(entity, 'id', '<unknown>')}: "
                f"{e.error_count()} error(s)",
                id=getattr(entity, "id", None),
                errors=['.'.join(str(p) for p in err["loc"]) for err in e.errors()],
            ) from e
        envelope = {
            "checksum": compute_checksum(record),
            "format": RECORD_FORMAT,
            "kind": self.kind,
            "record": record,
            "version": RECORD_VERSION,
        }
        return _canonical(envelope)

    def decode(self, data: bytes, identifier: Optional[str] = None) -> T:
        """
        Decode an envelope produced by :meth:`encode`.

        :param data: Slot bytes
        :type data: bytes
        :param identifier: Id or file name reported if decoding fails
        :type identifier: Optional[str]
        :return: Decoded entity
        :raises CorruptionError: On truncated bytes, malformed JSON, wrong kind,
            checksum mismatch or a record that does not fit the schema
        """
        ident = identifier or "<unknown>"
        try:
            envelope = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptionError(f"Unreadable {self.kind} record {ident}: {e}", identifier=ident) from e

        if not isinstance(envelope, dict) or envelope.get("format") != RECORD_FORMAT:
            raise CorruptionError(f"Not a {RECORD_FORMAT} envelope: {ident}", identifier=ident)
        if envelope.get("kind") != self.kind:
            raise CorruptionError(
                f"Expected {self.kind} record, found {envelope.get('kind')!r}: {ident}",
                identifier=ident,
            )

        record = envelope.get("record")
        if not isinstance(record, dict):
            raise CorruptionError(f"Envelope has no record body: {ident}", identifier=ident)

        expected = envelope.get("checksum")
        actual = compute_checksum(record)
        if actual != expected:
            raise CorruptionError(
                f"Checksum mismatch for {ident}",
                identifier=ident,
                expected=expected,
                actual=actual,
            )

        try:
            return self.model_type.model_validate_json(_canonical(record))
        except ValidationError as e:
            raise CorruptionError(
                f"Schema mismatch in {self.kind} record {ident}: {e.error_count()} error(s)",
                identifier=ident,
            ) from e


DOCUMENT_CODEC: RecordCodec[Document] = RecordCodec(Document, EntityKind.DOCUMENT.value)
FOLDER_CODEC: RecordCodec[Folder] = RecordCodec(Folder, EntityKind.FOLDER.value)
DELETED_RECORD_CODEC: RecordCodec[DeletedRecord] = RecordCodec(DeletedRecord, DELETED_KIND)


def codec_for(kind: EntityKind) -> Union[RecordCodec[Document], RecordCodec[Folder]]:
    if kind == EntityKind.DOCUMENT:
        return DOCUMENT_CODEC
    if kind == EntityKind.FOLDER:
        return FOLDER_CODEC
    raise ValueError(f"Unknown entity kind: {kind}")


def decode_snapshot(kind: EntityKind, data: bytes, identifier: Optional[str] = None) -> Union[Document, Folder]:
    """Decode the entity snapshot embedded in a deleted record."""
    return codec_for(kind).decode(data, identifier)

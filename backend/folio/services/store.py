"""Document and folder storage: CRUD, hierarchy, cascade delete and restore."""

import re
from pathlib import Path
from typing import Optional, Union

from folio.errors import CorruptionError, FolioError, IntegrityViolation, NotFoundError
from folio.logging import get_logger
from folio.models import (
    DeleteResult,
    Document,
    Drawing,
    EntityKind,
    Folder,
    Page,
    PageSize,
    PageTemplate,
)
from folio.models.domain.folder import COLOR_HEX_PATTERN
from folio.services.trash import TrashService
from folio.storage.codec import DOCUMENT_CODEC, FOLDER_CODEC
from folio.storage.repository import RecordRepository

logger = get_logger("services.store")

DOCUMENTS_DIRNAME = "documents"
FOLDERS_DIRNAME = "folders"
DOCUMENT_EXTENSION = ".note"
FOLDER_EXTENSION = ".folder"

Item = Union[Document, Folder]

_UNSET = object()


def _require_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise IntegrityViolation("Name must not be empty")
    return name


class DocumentStore:
    """
    Documents and folders on disk, served through per-kind caches.

    Soft deletes are handed to the trash service; the store depends on the
    trash, never the other way round.
    """

    def __init__(
        self,
        root: Path,
        trash: TrashService,
        durable: bool = True,
        default_template: PageTemplate = PageTemplate.BLANK,
    ):
        self.root = Path(root)
        self.trash = trash
        self.default_template = default_template
        self.documents: RecordRepository[Document] = RecordRepository(
            self.root / DOCUMENTS_DIRNAME,
            DOCUMENT_EXTENSION,
            DOCUMENT_CODEC,
            durable=durable,
        )
        self.folders: RecordRepository[Folder] = RecordRepository(
            self.root / FOLDERS_DIRNAME,
            FOLDER_EXTENSION,
            FOLDER_CODEC,
            durable=durable,
        )

    def _repository(self, kind: EntityKind) -> RecordRepository:
        if kind == EntityKind.DOCUMENT:
            return self.documents
        if kind == EntityKind.FOLDER:
            return self.folders
        raise ValueError(f"Unknown entity kind: {kind}")

    # Core CRUD

    async def save(self, entity: Item) -> Item:
        if isinstance(entity, Document):
            return await self.documents.save(entity)
        if isinstance(entity, Folder):
            return await self.folders.save(entity)
        raise TypeError(f"Cannot store {type(entity).__name__}")

    async def load(self, entity_id: str, kind: Optional[EntityKind] = None) -> Item:
        if kind is not None:
            return await self._repository(kind).load(entity_id)
        try:
            return await self.documents.load(entity_id)
        except NotFoundError:
            pass
        try:
            return await self.folders.load(entity_id)
        except NotFoundError:
            raise NotFoundError(f"Item {entity_id} not found", id=entity_id)

    async def load_document(self, document_id: str) -> Document:
        return await self.documents.load(document_id)

    async def load_folder(self, folder_id: str) -> Folder:
        return await self.folders.load(folder_id)

    async def load_all_in_container(
        self,
        folder_id: Optional[str] = None,
        kind: EntityKind = EntityKind.DOCUMENT,
    ) -> list[Item]:
        """Entities of one kind whose parent is ``folder_id`` (None = root level)."""
        entities = await self._repository(kind).load_all()
        return [e for e in entities if e.parent_folder_id == folder_id]

    async def list_items(self, folder_id: Optional[str] = None) -> list[Item]:
        """Folders and documents directly inside ``folder_id``, newest first."""
        folders = await self.load_all_in_container(folder_id, EntityKind.FOLDER)
        documents = await self.load_all_in_container(folder_id, EntityKind.DOCUMENT)
        return sorted(folders + documents, key=lambda item: item.modified_at, reverse=True)

    async def create_document(
        self,
        name: str,
        parent_folder_id: Optional[str] = None,
        template: Optional[PageTemplate] = None,
        page_size: PageSize = PageSize.A4,
    ) -> Document:
        await self._require_folder(parent_folder_id)
        document = Document(
            name=_require_name(name),
            parent_folder_id=parent_folder_id,
            page_size=page_size,
            pages=[Page(template=template or self.default_template)],
        )
        saved = await self.documents.save(document)
        logger.info(f"Created document: {saved.name} ({saved.id[:8]})")
        return saved

    async def create_folder(
        self,
        name: str,
        parent_folder_id: Optional[str] = None,
        color_hex: Optional[str] = None,
    ) -> Folder:
        await self._require_folder(parent_folder_id)
        folder = Folder(
            name=_require_name(name),
            parent_folder_id=parent_folder_id,
            color_hex=color_hex,
        )
        saved = await self.folders.save(folder)
        logger.info(f"Created folder: {saved.name} ({saved.id[:8]})")
        return saved

    async def _require_folder(self, folder_id: Optional[str]) -> None:
        if folder_id is not None:
            await self.folders.load(folder_id)

    # Delete

    async def delete(
        self,
        entity_id: str,
        permanent: bool = False,
        kind: Optional[EntityKind] = None,
    ) -> DeleteResult:
        """
        Delete a document or a folder subtree.

        Folder contents are deleted first, each child taking the same
        permanent/soft branch, so a soft-deleted folder leaves one trash record
        per document and per folder.
        """
        entity = await self.load(entity_id, kind)
        result = DeleteResult(permanent=permanent)
        await self._delete_entity(entity, permanent, result, set())
        logger.info(
            f"{'Permanently deleted' if permanent else 'Trashed'} {len(result.deleted_ids)} item(s) "
            f"under {entity.name} ({entity.id[:8]})"
        )
        return result

    async def _delete_entity(
        self,
        entity: Item,
        permanent: bool,
        result: DeleteResult,
        visited: set[str],
    ) -> None:
        if entity.id in visited:
            return
        visited.add(entity.id)

        if isinstance(entity, Folder):
            for document in await self.load_all_in_container(entity.id, EntityKind.DOCUMENT):
                await self._delete_entity(document, permanent, result, visited)
            for subfolder in await self.load_all_in_container(entity.id, EntityKind.FOLDER):
                await self._delete_entity(subfolder, permanent, result, visited)
            repository = self.folders
        else:
            repository = self.documents

        if not permanent:
            record = await self.trash.stage(entity)
            result.trash_record_ids.append(record.id)
        await repository.remove(entity.id)
        result.deleted_ids.append(entity.id)

    # Field edits

    async def move(
        self,
        entity_id: str,
        new_parent_id: Optional[str],
        kind: Optional[EntityKind] = None,
    ) -> Item:
        """
        Reparent an item. ``new_parent_id=None`` moves it to the root.

        :raises NotFoundError: If the item or the target folder does not exist
        :raises IntegrityViolation: If a folder would end up inside itself
        """
        entity = await self.load(entity_id, kind)
        if new_parent_id is not None:
            await self.folders.load(new_parent_id)
            if isinstance(entity, Folder):
                await self._reject_cycle(entity.id, new_parent_id)
        entity.parent_folder_id = new_parent_id
        entity.touch()
        return await self.save(entity)

    async def _reject_cycle(self, folder_id: str, new_parent_id: str) -> None:
        seen: set[str] = set()
        current: Optional[str] = new_parent_id
        while current is not None and current not in seen:
            if current == folder_id:
                raise IntegrityViolation(
                    "Cannot move a folder into itself or one of its subfolders",
                    folder_id=folder_id,
                    parent_folder_id=new_parent_id,
                )
            seen.add(current)
            try:
                ancestor = await self.folders.load(current)
            except (NotFoundError, CorruptionError):
                return
            current = ancestor.parent_folder_id

    async def rename(self, entity_id: str, new_name: str, kind: Optional[EntityKind] = None) -> Item:
        name = _require_name(new_name)
        entity = await self.load(entity_id, kind)
        entity.name = name
        entity.touch()
        return await self.save(entity)

    async def update_metadata(
        self,
        entity_id: str,
        *,
        color_hex=_UNSET,
        page_size: Optional[PageSize] = None,
        kind: Optional[EntityKind] = None,
    ) -> Item:
        """
        Patch display metadata: ``color_hex`` on folders (None clears it),
        ``page_size`` on documents.
        """
        entity = await self.load(entity_id, kind)
        if isinstance(entity, Folder):
            if page_size is not None:
                raise IntegrityViolation("Folders have no page size", id=entity_id)
            if color_hex is not _UNSET:
                if color_hex is not None and not re.match(COLOR_HEX_PATTERN, color_hex):
                    raise IntegrityViolation(f"Invalid color: {color_hex!r}", id=entity_id)
                entity.color_hex = color_hex
        else:
            if color_hex is not _UNSET:
                raise IntegrityViolation("Documents have no display color", id=entity_id)
            if page_size is not None:
                entity.page_size = PageSize(page_size)
        entity.touch()
        return await self.save(entity)

    async def resolve_path(self, folder_id: Optional[str]) -> list[Folder]:
        """
        Breadcrumb from the root down to ``folder_id``.

        A dangling or unreadable parent ends the walk; what was resolved so far
        is returned.
        """
        path: list[Folder] = []
        seen: set[str] = set()
        current = folder_id
        while current is not None:
            if current in seen:
                logger.warning(f"Folder cycle detected at {current}, truncating path")
                break
            seen.add(current)
            try:
                folder = await self.folders.load(current)
            except (NotFoundError, CorruptionError) as e:
                logger.warning(f"Broken folder chain at {current}: {e.message}")
                break
            path.insert(0, folder)
            current = folder.parent_folder_id
        return path

    # Pages

    async def add_page(self, document_id: str, template: Optional[PageTemplate] = None) -> Page:
        document = await self.documents.load(document_id)
        page = document.add_page(template or self.default_template)
        await self.documents.save(document)
        return page

    async def delete_page(self, document_id: str, page_id: str) -> Document:
        document = await self.documents.load(document_id)
        document.delete_page(document.page_index(page_id))
        return await self.documents.save(document)

    async def update_page_drawing(self, document_id: str, page_id: str, drawing: Drawing) -> Document:
        document = await self.documents.load(document_id)
        document.update_page(document.page_index(page_id), drawing)
        return await self.documents.save(document)

    async def set_page_thumbnail(self, document_id: str, page_id: str, thumbnail: Optional[bytes]) -> Document:
        document = await self.documents.load(document_id)
        document.set_thumbnail(document.page_index(page_id), thumbnail)
        return await self.documents.save(document)

    # Trash

    async def restore(self, record_id: str) -> Item:
        """
        Bring a deleted record back into active storage.

        An item whose former parent folder no longer exists comes back at the root.
        If the re-save fails, the original deleted record is put back unchanged
        and the save error propagates.
        """
        record = await self.trash.get(record_id)
        entity = await self.trash.restore(record_id)
        if entity.parent_folder_id is not None and not await self.folders.exists(entity.parent_folder_id):
            logger.info(f"Parent of {entity.name} is gone, restoring to root")
            entity.parent_folder_id = None
        try:
            return await self.save(entity)
        except FolioError:
            try:
                await self.trash.requeue(record)
            except FolioError as requeue_error:
                logger.error(
                    f"Could not return {record.name} ({record.id[:8]}) to trash: {requeue_error.message}"
                )
            raise

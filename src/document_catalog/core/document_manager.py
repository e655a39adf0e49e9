"""Document management business logic."""

import logging
from typing import List, Optional, Sequence

from ..exceptions import CatalogError, DuplicateURL, NotFound, ValidationError
from ..infrastructure.database.store import TableStore
from ..models.document import (
    BulkResult,
    Document,
    DocumentCreate,
    DocumentFilters,
    DocumentStatus,
    DocumentUpdate,
    SortOrder,
)
from ..models.session import Identity
from .activity_manager import ActivityManager
from .category_manager import CategoryManager
from .favorites_manager import FavoritesManager
from .file_types import detect_file_type
from .identifiers import DOCUMENT, Clock, generate_id, utcnow
from .identity import require_identity

logger = logging.getLogger(__name__)

# Labels used in the "<field> updated" change descriptions
FIELD_LABELS = {
    "name": "Name",
    "url": "URL",
    "description": "Description",
    "category": "Category",
    "tags": "Tags",
    "status": "Status",
}


class DocumentManager:
    """Business logic for document CRUD operations.

    Category and tag counters and the activity log are updated as side
    effects after the document row itself has been written. Those follow-up
    steps are best effort and never undo the document write.
    """

    TABLE = "documents"

    def __init__(
        self,
        store: TableStore,
        registry: CategoryManager,
        favorites: FavoritesManager,
        activity: ActivityManager,
        max_results: int = 100,
        clock: Clock = utcnow,
    ):
        """Initialize document manager.

        Args:
            store: Tabular store holding the documents table
            registry: Category and tag registry whose counters follow documents
            favorites: Favorites index, cleaned up when a document is deleted
            activity: Activity log receiving one entry per mutation
            max_results: Hard cap on the number of documents ``list_documents`` returns
            clock: Source of the current time
        """
        self.store = store
        self.registry = registry
        self.favorites = favorites
        self.activity = activity
        self.max_results = max_results
        self.clock = clock

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_documents(self, filters: Optional[DocumentFilters] = None) -> List[Document]:
        """List documents passing the filters, sorted and capped.

        Args:
            filters: Status / category / file-type sets and the sort order

        Returns:
            At most ``max_results`` documents
        """
        filters = filters or DocumentFilters()
        rows = await self.store.read_all(self.TABLE)
        documents = [doc for doc in (Document.model_validate(row) for row in rows) if doc.passes(filters)]
        _sort_documents(documents, filters.sort_by)
        return documents[: self.max_results]

    async def get_document(self, document_id: str) -> Document:
        """Get document by ID.

        Raises:
            NotFound: no document carries this id
        """
        row = await self.store.get(self.TABLE, document_id)
        if row is None:
            raise NotFound("Document not found")
        return Document.model_validate(row)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_document(self, user: Identity, doc_data: DocumentCreate) -> Document:
        """Create a new document.

        Args:
            user: Signed-in principal, recorded as the owner
            doc_data: Document creation data

        Returns:
            Created document

        Raises:
            ValidationError: name, url or category is missing
            DuplicateURL: any document, active or archived, already uses the url
        """
        user = require_identity(user)
        name = (doc_data.name or "").strip()
        url = (doc_data.url or "").strip()
        category = (doc_data.category or "").strip()
        missing = [field for field, value in (("name", name), ("url", url), ("category", category)) if not value]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        now = self.clock()
        async with self.store.locked(self.TABLE):
            if await self._url_taken(url):
                raise DuplicateURL(url)
            row = await self.store.append(self.TABLE, {
                "document_id": generate_id(DOCUMENT),
                "name": name,
                "url": url,
                "description": doc_data.description or "",
                "category": category,
                "file_type": detect_file_type(url),
                "owner_email": user.email,
                "tags": doc_data.tags or "",
                "date_added": now,
                "last_modified": now,
                "status": DocumentStatus.ACTIVE.value,
            })

        document = Document.model_validate(row)
        logger.info(f"Created document {document.document_id} for user {user.email}")

        await self.activity.record(user, "Created Document", document.document_id, f'Created "{name}"')
        await self.registry.update_category_count(category, 1)
        if document.tags:
            await self.registry.update_tag_counts(document.tags, 1)
        return document

    async def update_document(self, user: Identity, document_id: str, updates: DocumentUpdate) -> Document:
        """Update document fields.

        Only fields whose value differs from the stored one are written, but
        ``last_modified`` is stamped on every call.

        Raises:
            ValidationError: name, url or category would be left blank
            NotFound: no document carries this id
            DuplicateURL: the new url belongs to another document
        """
        user = require_identity(user)
        changes = updates.changes()
        blank = [field for field in ("name", "url", "category") if field in changes and not changes[field]]
        if blank:
            raise ValidationError(f"Required fields cannot be blank: {', '.join(blank)}")

        async with self.store.locked(self.TABLE):
            row = await self.store.get(self.TABLE, document_id)
            if row is None:
                raise NotFound("Document not found")
            current = Document.model_validate(row)

            values = {}
            descriptions = []
            for field, value in changes.items():
                if getattr(current, field) != value:
                    values[field] = value
                    descriptions.append(f"{FIELD_LABELS[field]} updated")

            if "url" in values:
                if await self._url_taken(values["url"], exclude_id=document_id):
                    raise DuplicateURL(values["url"])
                values["file_type"] = detect_file_type(values["url"])

            values["last_modified"] = self.clock()
            # Address the row by key again; it may have been deleted meanwhile
            if not await self.store.update_row(self.TABLE, document_id, values):
                raise NotFound("Document not found")

        updated = current.model_copy(update=values)

        if "category" in values:
            await self.registry.update_category_count(current.category, -1)
            await self.registry.update_category_count(updated.category, 1)
        if "tags" in values:
            await self.registry.update_tag_counts(current.tags, -1)
            await self.registry.update_tag_counts(updated.tags, 1)

        if descriptions:
            logger.info(f"Updated document {document_id}: {', '.join(descriptions)}")
            await self.activity.record(user, "Updated Document", document_id, ", ".join(descriptions))
        return updated

    async def archive_document(self, user: Identity, document_id: str) -> Document:
        """Set status to Archived."""
        return await self._set_status(user, document_id, DocumentStatus.ARCHIVED, "Document archived")

    async def restore_document(self, user: Identity, document_id: str) -> Document:
        """Set status back to Active."""
        return await self._set_status(user, document_id, DocumentStatus.ACTIVE, "Document restored")

    async def delete_document(self, user: Identity, document_id: str) -> Document:
        """Permanently delete a document.

        Counters are decremented and every user's favorite of the document
        is removed.

        Returns:
            The deleted document

        Raises:
            NotFound: no document carries this id
        """
        user = require_identity(user)
        async with self.store.locked(self.TABLE):
            row = await self.store.get(self.TABLE, document_id)
            if row is None or not await self.store.delete_row(self.TABLE, document_id):
                raise NotFound("Document not found")
        document = Document.model_validate(row)
        logger.info(f"Deleted document {document_id}")

        await self.registry.update_category_count(document.category, -1)
        if document.tags:
            await self.registry.update_tag_counts(document.tags, -1)
        try:
            await self.favorites.cascade_delete_by_document(document_id)
        except CatalogError as e:
            logger.error(f"Error removing favorites of deleted document {document_id}: {e}")
        await self.activity.record(user, "Deleted Document", document_id, f'Permanently deleted "{document.name}"')
        return document

    async def bulk_archive(self, user: Identity, document_ids: Sequence[str]) -> BulkResult:
        """Archive each document independently."""
        return await self._bulk_status(user, document_ids, DocumentStatus.ARCHIVED, "archived")

    async def bulk_restore(self, user: Identity, document_ids: Sequence[str]) -> BulkResult:
        """Restore each document independently."""
        return await self._bulk_status(user, document_ids, DocumentStatus.ACTIVE, "restored")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _url_taken(self, url: str, exclude_id: Optional[str] = None) -> bool:
        """Duplicate check across all documents regardless of status."""
        row = await self.store.find_row(
            self.TABLE,
            lambda r: r["url"] == url and r["document_id"] != exclude_id,
        )
        return row is not None

    async def _set_status(
        self, user: Identity, document_id: str, status: DocumentStatus, details: str
    ) -> Document:
        document = await self.update_document(user, document_id, DocumentUpdate(status=status))
        action = "Archived Document" if status is DocumentStatus.ARCHIVED else "Restored Document"
        await self.activity.record(user, action, document_id, details)
        return document

    async def _bulk_status(
        self, user: Identity, document_ids: Sequence[str], status: DocumentStatus, verb: str
    ) -> BulkResult:
        user = require_identity(user)
        failed = []
        for document_id in document_ids:
            try:
                await self._set_status(user, document_id, status, "Bulk operation")
            except CatalogError as e:
                logger.warning(f"Bulk {verb} skipped {document_id}: {e}")
                failed.append(document_id)

        total = len(document_ids)
        succeeded = total - len(failed)
        return BulkResult(
            succeeded=succeeded,
            total=total,
            summary=f"{succeeded} of {total} documents {verb}.",
            failed_ids=failed,
        )


def _sort_documents(documents: List[Document], sort_by: SortOrder) -> None:
    if sort_by == SortOrder.NAME_ASC:
        documents.sort(key=lambda d: (d.name.casefold(), d.name))
    elif sort_by == SortOrder.NAME_DESC:
        documents.sort(key=lambda d: (d.name.casefold(), d.name), reverse=True)
    elif sort_by == SortOrder.DATE_ASC:
        documents.sort(key=lambda d: d.date_added)
    else:
        documents.sort(key=lambda d: d.last_modified, reverse=True)

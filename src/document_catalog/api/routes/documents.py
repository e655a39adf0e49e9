"""Document CRUD endpoints."""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ...core.activity_manager import ActivityManager
from ...core.document_manager import DocumentManager
from ...core.identity import require_identity
from ...models.document import DocumentCreate, DocumentFilters, DocumentUpdate, SortOrder
from ...models.requests import BulkRequest, OperationResult, ViewRequest
from ...models.session import Identity
from ..dependencies import get_activity_manager, get_current_user, get_document_manager
from ..responses import respond

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    401: {"model": OperationResult, "description": "Missing identity headers"},
    404: {"model": OperationResult, "description": "Document not found"},
    409: {"model": OperationResult, "description": "Duplicate URL"},
    422: {"model": OperationResult, "description": "Missing or invalid fields"},
    503: {"model": OperationResult, "description": "Database not initialized"},
}


@router.get(
    "",
    response_model=OperationResult,
    summary="List Documents",
    description="""
List catalog documents with optional filtering and sorting.

- `status`, `categories`, `file_types`: repeatable; a document must match one
  value of every filter that is given
- `sort_by`: `name_asc`, `name_desc`, `date_asc` or `date_desc` (last modified, default)

The result is capped at the configured maximum number of search results.
    """,
    responses=ERROR_RESPONSES,
)
async def list_documents(
    status: List[str] = Query(default=[]),
    categories: List[str] = Query(default=[]),
    file_types: List[str] = Query(default=[]),
    sort_by: SortOrder = Query(default=SortOrder.DATE_DESC),
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """List documents."""
    async def operation():
        require_identity(user)
        filters = DocumentFilters(status=status, categories=categories, file_types=file_types, sort_by=sort_by)
        documents = await manager.list_documents(filters)
        return {"documents": documents, "total_count": len(documents)}

    return await respond(operation())


@router.post(
    "",
    response_model=OperationResult,
    status_code=201,
    summary="Add Document",
    description="""
Add a link to an externally hosted document.

`name`, `url` and `category` are required. The url must not be used by any
other document, archived ones included. The file type is inferred from the url.
Category and tag counters are incremented.
    """,
    responses=ERROR_RESPONSES,
)
async def add_document(
    doc_data: DocumentCreate,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Add a document."""
    async def operation():
        document = await manager.add_document(user, doc_data)
        return {
            "document_id": document.document_id,
            "document": document,
            "message": "Document added successfully",
        }

    return await respond(operation(), status_code=201)


@router.post("/bulk/archive", response_model=OperationResult, summary="Bulk Archive", responses=ERROR_RESPONSES)
async def bulk_archive(
    request: BulkRequest,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Archive several documents; failures on single ids are tolerated."""
    async def operation():
        result = await manager.bulk_archive(user, request.document_ids)
        return result.model_dump()

    return await respond(operation())


@router.post("/bulk/restore", response_model=OperationResult, summary="Bulk Restore", responses=ERROR_RESPONSES)
async def bulk_restore(
    request: BulkRequest,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Restore several documents; failures on single ids are tolerated."""
    async def operation():
        result = await manager.bulk_restore(user, request.document_ids)
        return result.model_dump()

    return await respond(operation())


@router.get("/{document_id}", response_model=OperationResult, summary="Get Document", responses=ERROR_RESPONSES)
async def get_document(
    document_id: str,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Get document by ID."""
    async def operation():
        require_identity(user)
        return {"document": await manager.get_document(document_id)}

    return await respond(operation())


@router.patch(
    "/{document_id}",
    response_model=OperationResult,
    summary="Update Document",
    description="""
Update any of `name`, `url`, `description`, `category`, `tags`, `status`.

Only changed fields are written; the last-modified time is always refreshed.
Moving a document to another category or changing its tags moves the
corresponding counters.
    """,
    responses=ERROR_RESPONSES,
)
async def update_document(
    document_id: str,
    updates: DocumentUpdate,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Update document."""
    async def operation():
        document = await manager.update_document(user, document_id, updates)
        return {"document": document, "message": "Document updated successfully"}

    return await respond(operation())


@router.post("/{document_id}/archive", response_model=OperationResult, summary="Archive Document", responses=ERROR_RESPONSES)
async def archive_document(
    document_id: str,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Archive document."""
    async def operation():
        document = await manager.archive_document(user, document_id)
        return {"document": document, "message": "Document archived"}

    return await respond(operation())


@router.post("/{document_id}/restore", response_model=OperationResult, summary="Restore Document", responses=ERROR_RESPONSES)
async def restore_document(
    document_id: str,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Restore document."""
    async def operation():
        document = await manager.restore_document(user, document_id)
        return {"document": document, "message": "Document restored"}

    return await respond(operation())


@router.delete(
    "/{document_id}",
    response_model=OperationResult,
    summary="Delete Document",
    description="""
Permanently delete a document.

Its category and tag counters are decremented and it is removed from every
user's favorites.
    """,
    responses=ERROR_RESPONSES,
)
async def delete_document(
    document_id: str,
    user: Identity = Depends(get_current_user),
    manager: DocumentManager = Depends(get_document_manager),
):
    """Delete document."""
    async def operation():
        await manager.delete_document(user, document_id)
        return {"message": "Document deleted successfully"}

    return await respond(operation())


@router.post("/{document_id}/views", response_model=OperationResult, summary="Record View", responses=ERROR_RESPONSES)
async def record_view(
    document_id: str,
    request: Optional[ViewRequest] = None,
    user: Identity = Depends(get_current_user),
    activity: ActivityManager = Depends(get_activity_manager),
):
    """Record that the user opened the document."""
    async def operation():
        source = request.source if request else ViewRequest().source
        view = await activity.record_view(user, document_id, source)
        return {"view_id": view.view_id, "message": "View recorded"}

    return await respond(operation())

"""Data models for Document Catalog."""

from .document import (
    Document,
    DocumentCreate,
    DocumentUpdate,
    DocumentFilters,
    DocumentStatus,
    SortOrder,
    BulkResult,
    split_tags,
)
from .catalog import Category, Tag, Favorite
from .session import Identity, OnlineUser
from .activity import ActivityEntry, ViewRecord, AnalyticsSummary
from .requests import OperationResult, NameRequest, BulkRequest, ViewRequest, HealthResponse

__all__ = [
    "Document",
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentFilters",
    "DocumentStatus",
    "SortOrder",
    "BulkResult",
    "split_tags",
    "Category",
    "Tag",
    "Favorite",
    "Identity",
    "OnlineUser",
    "ActivityEntry",
    "ViewRecord",
    "AnalyticsSummary",
    "OperationResult",
    "NameRequest",
    "BulkRequest",
    "ViewRequest",
    "HealthResponse",
]

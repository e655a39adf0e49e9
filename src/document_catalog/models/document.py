"""Document data models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentStatus(str, Enum):
    ACTIVE = "Active"
    ARCHIVED = "Archived"


class SortOrder(str, Enum):
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"  # last-modified, newest first


def split_tags(tags: Optional[str]) -> List[str]:
    """Split a comma-joined tags string into trimmed, non-empty names."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def _join_tags(value):
    if isinstance(value, (list, tuple)):
        return ", ".join(str(tag).strip() for tag in value if str(tag).strip())
    return value


class DocumentCreate(BaseModel):
    """Model for adding a document.

    Required fields are checked by the document manager so that a missing
    field is reported through the regular error envelope.
    """
    name: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    description: str = ""
    tags: Union[str, List[str]] = ""

    @field_validator("tags", mode="before")
    @classmethod
    def join_tag_list(cls, value):
        return _join_tags(value)


class DocumentUpdate(BaseModel):
    """Model for updating a document; only fields that are set are applied.

    Name, url and category are trimmed here; a value left blank is rejected
    by the document manager since those fields are required.
    """
    name: Optional[str] = Field(None, max_length=500)
    url: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[Union[str, List[str]]] = None
    status: Optional[DocumentStatus] = None

    @field_validator("tags", mode="before")
    @classmethod
    def join_tag_list(cls, value):
        return _join_tags(value)

    @field_validator("name", "url", "category", mode="before")
    @classmethod
    def strip_required(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    def changes(self) -> dict:
        """Fields explicitly provided with a non-null value."""
        values = self.model_dump(exclude_unset=True, exclude_none=True)
        if "status" in values:
            values["status"] = DocumentStatus(values["status"]).value
        return values


class DocumentFilters(BaseModel):
    """Listing filters; an empty set lets every value through."""
    status: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    file_types: List[str] = Field(default_factory=list)
    sort_by: SortOrder = SortOrder.DATE_DESC


class Document(BaseModel):
    """Full document record."""
    model_config = ConfigDict(from_attributes=True)

    document_id: str
    name: str
    url: str
    description: str = ""
    category: str
    file_type: str
    owner_email: str
    tags: str = ""
    date_added: datetime
    last_modified: datetime
    status: str = DocumentStatus.ACTIVE.value

    @property
    def tag_names(self) -> List[str]:
        return split_tags(self.tags)

    def passes(self, filters: DocumentFilters) -> bool:
        """AND across filter dimensions, OR within each dimension."""
        if filters.status and self.status not in filters.status:
            return False
        if filters.categories and self.category not in filters.categories:
            return False
        if filters.file_types and self.file_type not in filters.file_types:
            return False
        return True


class BulkResult(BaseModel):
    """Outcome of a bulk archive/restore; partial success is allowed."""
    succeeded: int
    total: int
    summary: str
    failed_ids: List[str] = Field(default_factory=list)

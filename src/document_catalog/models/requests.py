"""Request and response models for API endpoints."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class OperationResult(BaseModel):
    """Envelope every operation answers with."""
    model_config = ConfigDict(extra="allow")

    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None


class NameRequest(BaseModel):
    """Request model for creating a category or tag."""
    name: str = ""


class BulkRequest(BaseModel):
    """Request model for bulk archive/restore."""
    document_ids: List[str] = Field(default_factory=list)


class ViewRequest(BaseModel):
    source: str = "Web Browser"


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    service: str
    version: str
    database_connected: bool
    details: Dict[str, Any] = Field(default_factory=dict)

"""Activity log and analytics models."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ActivityEntry(BaseModel):
    activity_id: str
    user_email: str
    user_name: str
    action: str
    document_id: Optional[str] = None
    details: str = ""
    timestamp: datetime


class ViewRecord(BaseModel):
    view_id: str
    document_id: str
    user_email: str
    timestamp: datetime
    source: str
    document_name: str


class AnalyticsSummary(BaseModel):
    """Usage summary; only the view total is computed today."""
    total_views: int = 0
    top_documents: List[Dict[str, Any]] = Field(default_factory=list)
    top_categories: Dict[str, int] = Field(default_factory=dict)
    recent_views: List[Dict[str, Any]] = Field(default_factory=list)
    views_by_day: Dict[str, int] = Field(default_factory=dict)

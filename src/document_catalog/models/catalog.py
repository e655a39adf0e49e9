"""Category, tag and favorite models."""

from datetime import datetime
from pydantic import BaseModel, Field


class Category(BaseModel):
    category_id: str
    name: str
    created_by: str
    date_created: datetime
    active: bool = True
    document_count: int = Field(default=0, ge=0)


class Tag(BaseModel):
    tag_id: str
    name: str
    created_by: str
    date_created: datetime
    usage_count: int = Field(default=0, ge=0)


class Favorite(BaseModel):
    favorite_id: str
    user_email: str
    document_id: str
    date_added: datetime

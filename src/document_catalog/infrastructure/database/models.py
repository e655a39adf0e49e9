"""SQLAlchemy ORM models for the catalog tables.

Every table carries an integer ``row_id`` that records insertion order (the
row position) and a string key column that addresses the row for writes.
"""

from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DocumentModel(Base):
    """Catalog entry pointing at an externally hosted resource."""
    __tablename__ = "documents"
    __key__ = "document_id"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(64), nullable=False, unique=True)
    name = Column(String(500), nullable=False)
    url = Column(String(2048), nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")
    category = Column(String(200), nullable=False, index=True)
    file_type = Column(String(50), nullable=False)
    owner_email = Column(String(320), nullable=False)
    tags = Column(Text, nullable=False, default="")  # comma-joined tag names
    date_added = Column(DateTime, nullable=False, default=_utcnow)
    last_modified = Column(DateTime, nullable=False, default=_utcnow)
    status = Column(String(20), nullable=False, default="Active", index=True)

    def __repr__(self):
        return f"<DocumentModel(document_id={self.document_id}, name={self.name})>"


class CategoryModel(Base):
    __tablename__ = "categories"
    __key__ = "category_id"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(String(64), nullable=False, unique=True)
    name = Column(String(200), nullable=False, unique=True)
    created_by = Column(String(320), nullable=False)
    date_created = Column(DateTime, nullable=False, default=_utcnow)
    active = Column(Boolean, nullable=False, default=True)
    document_count = Column(Integer, nullable=False, default=0)


class TagModel(Base):
    __tablename__ = "tags"
    __key__ = "tag_id"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    tag_id = Column(String(64), nullable=False, unique=True)
    name = Column(String(200), nullable=False, unique=True)
    created_by = Column(String(320), nullable=False)
    date_created = Column(DateTime, nullable=False, default=_utcnow)
    usage_count = Column(Integer, nullable=False, default=0)


class FavoriteModel(Base):
    __tablename__ = "user_favorites"
    __key__ = "favorite_id"
    __table_args__ = (UniqueConstraint("user_email", "document_id", name="uq_favorite_user_document"),)

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    favorite_id = Column(String(64), nullable=False, unique=True)
    user_email = Column(String(320), nullable=False, index=True)
    document_id = Column(String(64), nullable=False, index=True)
    date_added = Column(DateTime, nullable=False, default=_utcnow)


class OnlineUserModel(Base):
    """Live presence session; at most one row per user."""
    __tablename__ = "online_users"
    __key__ = "user_email"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(64), nullable=False, unique=True)
    user_email = Column(String(320), nullable=False, unique=True)
    user_name = Column(String(200), nullable=False)
    login_time = Column(DateTime, nullable=False)
    last_activity = Column(DateTime, nullable=False, index=True)
    avatar = Column(String(16), nullable=False, default="")
    status = Column(String(20), nullable=False, default="Online")


class ActivityLogModel(Base):
    """Append-only audit trail."""
    __tablename__ = "activity_log"
    __key__ = "activity_id"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    activity_id = Column(String(64), nullable=False, unique=True)
    user_email = Column(String(320), nullable=False)
    user_name = Column(String(200), nullable=False)
    action = Column(String(100), nullable=False)
    document_id = Column(String(64), nullable=True)
    details = Column(Text, nullable=False, default="")
    timestamp = Column(DateTime, nullable=False, default=_utcnow)


class AnalyticsViewModel(Base):
    """Append-only document view event."""
    __tablename__ = "analytics"
    __key__ = "view_id"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    view_id = Column(String(64), nullable=False, unique=True)
    document_id = Column(String(64), nullable=False, index=True)
    user_email = Column(String(320), nullable=False)
    timestamp = Column(DateTime, nullable=False, default=_utcnow)
    source = Column(String(100), nullable=False, default="Web Browser")
    document_name = Column(String(500), nullable=False)


TABLES = {
    model.__tablename__: model
    for model in (
        DocumentModel,
        CategoryModel,
        TagModel,
        FavoriteModel,
        OnlineUserModel,
        ActivityLogModel,
        AnalyticsViewModel,
    )
}

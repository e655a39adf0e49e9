"""Tabular store backed by SQLAlchemy."""

from .models import Base, TABLES
from .store import TableStore

__all__ = ["Base", "TABLES", "TableStore"]

"""Tabular store adapter over SQLAlchemy.

Tables are addressed by name and rows are plain dicts keyed by column name,
so callers never touch the ORM. Writes always address a row by its key
column and are re-validated at write time: an update or delete that matches
no row reports ``False`` instead of writing through a stale position.

Operations are independent; a multi-step mutation is several calls and the
earlier steps persist if a later one fails. ``locked()`` serializes
read-then-write sequences on the same tables within this process.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

from sqlalchemy import Table, case, delete, func, insert, inspect, select, text, update
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine

from ...exceptions import (
    CatalogError,
    DuplicateName,
    DuplicateURL,
    InternalError,
    StoreUnavailable,
    ValidationError,
)
from .models import Base, TABLES

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
RowPredicate = Callable[[Row], bool]

# Unique columns whose violation is a caller-facing duplicate, not a fault
UNIQUE_CONFLICTS: Dict[tuple, Callable[[Row], CatalogError]] = {
    ("documents", "url"): lambda row: DuplicateURL(row.get("url", "")),
    ("categories", "name"): lambda row: DuplicateName("Category", row.get("name", "")),
    ("tags", "name"): lambda row: DuplicateName("Tag", row.get("name", "")),
}


class TableStore:
    """Async read/append/update/delete over named tables."""

    def __init__(self, database_url: str):
        """Initialize the store.

        Args:
            database_url: SQLAlchemy database URL (e.g., sqlite+aiosqlite:///./catalog.db)
        """
        self.engine = create_async_engine(database_url, echo=False)
        self._locks: Dict[str, asyncio.Lock] = {}

    async def initialize(self):
        """Create any missing tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Table store initialized successfully")

    async def close(self):
        """Close database connections."""
        await self.engine.dispose()

    async def ping(self) -> bool:
        """Return True when the backend answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Store ping failed: {e}")
            return False

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def locked(self, *table_names: str) -> AsyncIterator[None]:
        """Hold the per-table locks for a read-then-write sequence.

        Locks are taken in sorted name order so two callers locking
        overlapping sets cannot deadlock.
        """
        locks = [self._locks.setdefault(name, asyncio.Lock()) for name in sorted(set(table_names))]
        for lock in locks:
            await lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _table(self, name: str) -> Table:
        model = TABLES.get(name)
        if model is None:
            raise StoreUnavailable(name)
        return model.__table__

    def _key_column(self, name: str):
        model = TABLES[name]
        return self._table(name).c[model.__key__]

    def _check_fields(self, name: str, fields) -> None:
        columns = self._table(name).c
        unknown = [field for field in fields if field not in columns or field == "row_id"]
        if unknown:
            raise ValidationError(f"Unknown field(s) for table '{name}': {', '.join(unknown)}")

    def _conflict(self, name: str, error: IntegrityError, values: Row) -> Optional[CatalogError]:
        """Duplicate error for a broken unique column, if it is one callers know."""
        message = str(error.orig)
        for (table_name, column), make_error in UNIQUE_CONFLICTS.items():
            # SQLite names "table.column", PostgreSQL the "table_column_key" constraint
            if table_name == name and (
                f"{table_name}.{column}" in message or f"{table_name}_{column}_key" in message
            ):
                return make_error(values)
        return None

    @asynccontextmanager
    async def _connect(self, name: str, values: Optional[Row] = None) -> AsyncIterator[AsyncConnection]:
        """Open a transaction on one table, failing if the table is missing.

        ``values`` are the fields being written; they name the duplicate
        when a unique column rejects the write.
        """
        table = self._table(name)
        try:
            async with self.engine.begin() as conn:
                exists = await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(table.name))
                if not exists:
                    raise StoreUnavailable(name)
                yield conn
        except IntegrityError as e:
            conflict = self._conflict(name, e, values or {})
            if conflict is not None:
                logger.warning(f"Unique constraint rejected write on '{name}': {e.orig}")
                raise conflict from e
            logger.error(f"Store access failed on '{name}': {e}")
            raise InternalError(f"Store access failed: {e}") from e
        except (OperationalError, ProgrammingError) as e:
            if "no such table" in str(e).lower() or "does not exist" in str(e).lower():
                raise StoreUnavailable(name) from e
            logger.error(f"Store access failed on '{name}': {e}")
            raise InternalError(f"Store access failed: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Store access failed on '{name}': {e}")
            raise InternalError(f"Store access failed: {e}") from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def read_all(self, name: str) -> List[Row]:
        """Return every row of a table in insertion order."""
        table = self._table(name)
        async with self._connect(name) as conn:
            result = await conn.execute(select(table).order_by(table.c.row_id))
            return [dict(row._mapping) for row in result]

    async def count(self, name: str) -> int:
        """Number of data rows in a table."""
        table = self._table(name)
        async with self._connect(name) as conn:
            result = await conn.execute(select(func.count()).select_from(table))
            return result.scalar_one()

    async def get(self, name: str, key: Any) -> Optional[Row]:
        """Fetch one row by its key column."""
        table = self._table(name)
        async with self._connect(name) as conn:
            result = await conn.execute(select(table).where(self._key_column(name) == key))
            row = result.first()
            return dict(row._mapping) if row else None

    async def find_row(self, name: str, predicate: RowPredicate) -> Optional[Row]:
        """First row (in insertion order) matching the predicate."""
        for row in await self.read_all(name):
            if predicate(row):
                return row
        return None

    async def find_row_index(self, name: str, predicate: RowPredicate) -> int:
        """Position of the first matching row, or -1 when none matches."""
        for index, row in enumerate(await self.read_all(name)):
            if predicate(row):
                return index
        return -1

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def append(self, name: str, row: Row) -> Row:
        """Append a row and return it as stored."""
        self._check_fields(name, row)
        table = self._table(name)
        async with self._connect(name, row) as conn:
            result = await conn.execute(insert(table).values(**row))
            row_id = result.inserted_primary_key[0]
            stored = await conn.execute(select(table).where(table.c.row_id == row_id))
            return dict(stored.first()._mapping)

    async def update_cell(self, name: str, key: Any, field: str, value: Any) -> bool:
        """Set one field of the row addressed by key."""
        return await self.update_row(name, key, {field: value})

    async def update_row(self, name: str, key: Any, values: Row) -> bool:
        """Set several fields of the row addressed by key.

        Returns False when no row carries the key any more.
        """
        self._check_fields(name, values)
        table = self._table(name)
        async with self._connect(name, values) as conn:
            result = await conn.execute(
                update(table).where(self._key_column(name) == key).values(**values)
            )
            return result.rowcount > 0

    async def increment_cell(self, name: str, key: Any, field: str, delta: int, floor: int = 0) -> bool:
        """Atomically add delta to an integer field, clamping at floor."""
        self._check_fields(name, [field])
        table = self._table(name)
        column = table.c[field]
        new_value = case((column + delta < floor, floor), else_=column + delta)
        async with self._connect(name) as conn:
            result = await conn.execute(
                update(table).where(self._key_column(name) == key).values({field: new_value})
            )
            return result.rowcount > 0

    async def delete_row(self, name: str, key: Any) -> bool:
        """Delete the row addressed by key; False when it was already gone."""
        table = self._table(name)
        async with self._connect(name) as conn:
            result = await conn.execute(delete(table).where(self._key_column(name) == key))
            return result.rowcount > 0

    async def delete_matching(self, name: str, predicate: RowPredicate) -> int:
        """Delete every row matching the predicate and return how many went."""
        key_field = TABLES[name].__key__
        keys = [row[key_field] for row in await self.read_all(name) if predicate(row)]
        if not keys:
            return 0
        table = self._table(name)
        async with self._connect(name) as conn:
            result = await conn.execute(delete(table).where(self._key_column(name).in_(keys)))
            return result.rowcount

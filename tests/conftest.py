"""Shared fixtures: a throwaway SQLite store per test and a controllable clock."""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy import text

from document_catalog.core.activity_manager import ActivityManager
from document_catalog.core.category_manager import CategoryManager
from document_catalog.core.document_manager import DocumentManager
from document_catalog.core.favorites_manager import FavoritesManager
from document_catalog.core.identity import resolve_identity
from document_catalog.core.initial_data import InitialDataLoader
from document_catalog.core.session_manager import SessionManager
from document_catalog.infrastructure.database.store import TableStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2026, 3, 2, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
async def store(database_url):
    table_store = TableStore(database_url)
    await table_store.initialize()
    yield table_store
    await table_store.close()


@pytest.fixture
def drop_table(store):
    """Remove a table to simulate an uninitialized database."""
    async def _drop(name: str):
        async with store.engine.begin() as conn:
            await conn.execute(text(f"DROP TABLE {name}"))
    return _drop


@pytest.fixture
def alice():
    return resolve_identity("alice.smith@example.com")


@pytest.fixture
def bob():
    return resolve_identity("bob@example.com", "Bob B.")


@pytest.fixture
def anonymous():
    return resolve_identity(None)


@pytest.fixture
def catalog(store, clock):
    """All managers wired around the test store, sharing the fake clock."""
    activity = ActivityManager(store, recent_limit=20, clock=clock)
    registry = CategoryManager(store, activity, clock=clock)
    favorites = FavoritesManager(store, activity, clock=clock)
    documents = DocumentManager(store, registry, favorites, activity, max_results=100, clock=clock)
    sessions = SessionManager(store, timeout_minutes=30, clock=clock)
    loader = InitialDataLoader(documents, registry, favorites, activity, sessions)
    return SimpleNamespace(
        store=store,
        activity=activity,
        registry=registry,
        favorites=favorites,
        documents=documents,
        sessions=sessions,
        loader=loader,
    )

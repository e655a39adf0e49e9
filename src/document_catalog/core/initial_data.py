"""Combined first-load payload for the catalog UI."""

import logging
from typing import Any, Awaitable, Callable, Dict, TypeVar

from ..models.session import Identity
from .activity_manager import ActivityManager
from .category_manager import CategoryManager
from .document_manager import DocumentManager
from .favorites_manager import FavoritesManager
from .identity import require_identity
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InitialDataLoader:
    """Gathers everything the page needs in one round trip.

    A failing section contributes its empty default instead of failing the
    whole load.
    """

    def __init__(
        self,
        documents: DocumentManager,
        registry: CategoryManager,
        favorites: FavoritesManager,
        activity: ActivityManager,
        sessions: SessionManager,
        app_name: str = "Document Center",
        version: str = "1.0.0",
    ):
        self.documents = documents
        self.registry = registry
        self.favorites = favorites
        self.activity = activity
        self.sessions = sessions
        self.app_name = app_name
        self.version = version

    async def load(self, user: Identity) -> Dict[str, Any]:
        user = require_identity(user)

        documents = await _section("documents", self.documents.list_documents, [])
        categories = await _section("categories", self.registry.list_categories, [])
        tags = await _section("tags", self.registry.list_tags, [])
        favorites = await _section("favorites", lambda: self.favorites.list_favorite_ids(user.email), [])
        recent = await _section("recent activity", self.activity.recent_activity, [])
        online = await _section("online users", self.sessions.list_online, [])
        analytics = await _section("analytics", self.activity.analytics_summary, None)

        return {
            "user": user.model_dump(),
            "documents": [doc.model_dump(mode="json") for doc in documents],
            "categories": [category.model_dump(mode="json") for category in categories],
            "tags": [tag.model_dump(mode="json") for tag in tags],
            "favorites": favorites,
            "recent_activity": [entry.model_dump(mode="json") for entry in recent],
            "online_users": [online_user.model_dump(mode="json") for online_user in online],
            "analytics": analytics.model_dump(mode="json") if analytics is not None else {},
            "config": {"app_name": self.app_name, "version": self.version},
        }


async def _section(label: str, fetch: Callable[[], Awaitable[T]], default: T) -> T:
    try:
        return await fetch()
    except Exception as e:
        logger.warning(f"Initial data: {label} unavailable ({e})")
        return default

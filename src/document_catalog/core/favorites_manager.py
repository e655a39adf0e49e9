"""Per-user favorite documents."""

import logging
from typing import List

from ..infrastructure.database.store import TableStore
from ..models.session import Identity
from .activity_manager import ActivityManager
from .identifiers import FAVORITE, Clock, generate_id, utcnow
from .identity import require_identity

logger = logging.getLogger(__name__)


class FavoritesManager:
    """Toggle-style favorites, one row per (user, document) pair."""

    TABLE = "user_favorites"

    def __init__(self, store: TableStore, activity: ActivityManager, clock: Clock = utcnow):
        self.store = store
        self.activity = activity
        self.clock = clock

    async def toggle(self, user: Identity, document_id: str) -> bool:
        """Flip the favorite state of a document for the user.

        Returns:
            True if the document is now a favorite, False if it was removed
        """
        user = require_identity(user)
        async with self.store.locked(self.TABLE):
            existing = await self.store.find_row(
                self.TABLE,
                lambda row: row["user_email"] == user.email and row["document_id"] == document_id,
            )
            if existing:
                await self.store.delete_row(self.TABLE, existing["favorite_id"])
                favorited = False
            else:
                await self.store.append(self.TABLE, {
                    "favorite_id": generate_id(FAVORITE),
                    "user_email": user.email,
                    "document_id": document_id,
                    "date_added": self.clock(),
                })
                favorited = True

        if favorited:
            await self.activity.record(user, "Added Favorite", document_id, "Added to favorites")
        else:
            await self.activity.record(user, "Removed Favorite", document_id, "Removed from favorites")
        return favorited

    async def list_favorite_ids(self, user_email: str) -> List[str]:
        """Document ids the user has favorited (no particular order)."""
        rows = await self.store.read_all(self.TABLE)
        return [row["document_id"] for row in rows if row["user_email"] == user_email]

    async def cascade_delete_by_document(self, document_id: str) -> int:
        """Remove every user's favorite of a deleted document."""
        async with self.store.locked(self.TABLE):
            removed = await self.store.delete_matching(self.TABLE, lambda row: row["document_id"] == document_id)
        if removed:
            logger.info(f"Removed {removed} favorite(s) of deleted document {document_id}")
        return removed

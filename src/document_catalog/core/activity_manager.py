"""Activity log and view analytics."""

import logging
from typing import List, Optional

from ..infrastructure.database.store import TableStore
from ..models.activity import ActivityEntry, AnalyticsSummary, ViewRecord
from ..models.session import Identity
from .identifiers import ACTIVITY, VIEW, Clock, generate_id, utcnow
from .identity import require_identity

logger = logging.getLogger(__name__)

UNKNOWN_DOCUMENT = "Unknown Document"


class ActivityManager:
    """Append-only audit trail plus document view tracking."""

    TABLE = "activity_log"
    VIEWS_TABLE = "analytics"
    DOCUMENTS_TABLE = "documents"

    def __init__(self, store: TableStore, recent_limit: int = 20, clock: Clock = utcnow):
        self.store = store
        self.recent_limit = recent_limit
        self.clock = clock

    async def record(
        self,
        user: Identity,
        action: str,
        document_id: Optional[str] = None,
        details: Optional[str] = None,
    ) -> Optional[ActivityEntry]:
        """Append an activity entry.

        Never raises: the audit trail must not fail the operation that
        triggered it, so failures are only logged.
        """
        try:
            row = await self.store.append(self.TABLE, {
                "activity_id": generate_id(ACTIVITY),
                "user_email": user.email or "",
                "user_name": user.name or "",
                "action": action,
                "document_id": document_id or None,
                "details": details or "",
                "timestamp": self.clock(),
            })
            return ActivityEntry.model_validate(row)
        except Exception as e:
            logger.error(f"Error logging activity '{action}': {e}")
            return None

    async def recent_activity(self, limit: Optional[int] = None) -> List[ActivityEntry]:
        """Last ``limit`` entries, most recent first."""
        limit = self.recent_limit if limit is None else limit
        if limit <= 0:
            return []
        rows = await self.store.read_all(self.TABLE)
        return [ActivityEntry.model_validate(row) for row in reversed(rows[-limit:])]

    async def record_view(self, user: Identity, document_id: str, source: str = "Web Browser") -> ViewRecord:
        """Append a view event with a snapshot of the document's current name."""
        user = require_identity(user)
        document = await self.store.get(self.DOCUMENTS_TABLE, document_id)
        row = await self.store.append(self.VIEWS_TABLE, {
            "view_id": generate_id(VIEW),
            "document_id": document_id,
            "user_email": user.email,
            "timestamp": self.clock(),
            "source": source,
            "document_name": document["name"] if document else UNKNOWN_DOCUMENT,
        })
        return ViewRecord.model_validate(row)

    async def analytics_summary(self) -> AnalyticsSummary:
        """Usage summary. Only the total view count is computed."""
        return AnalyticsSummary(total_views=await self.store.count(self.VIEWS_TABLE))

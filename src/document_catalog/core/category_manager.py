"""Category and tag registry with usage counters."""

import logging
from typing import List, Optional

from ..exceptions import DuplicateName, ValidationError
from ..infrastructure.database.store import TableStore
from ..models.catalog import Category, Tag
from ..models.document import split_tags
from ..models.session import Identity
from .activity_manager import ActivityManager
from .identifiers import CATEGORY, TAG, Clock, generate_id, utcnow
from .identity import require_identity

logger = logging.getLogger(__name__)


class CategoryManager:
    """Maintains the category and tag tables.

    Counters follow document mutations on a best-effort basis: adjusting the
    counter of a name that has no row is a no-op, and any store failure is
    logged rather than raised.
    """

    CATEGORIES_TABLE = "categories"
    TAGS_TABLE = "tags"

    def __init__(self, store: TableStore, activity: ActivityManager, clock: Clock = utcnow):
        self.store = store
        self.activity = activity
        self.clock = clock

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def add_category(self, user: Identity, name: Optional[str]) -> Category:
        """Create an active category with a zero document count.

        Raises:
            ValidationError: the name is empty
            DuplicateName: a category with exactly this name exists
        """
        user = require_identity(user)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")

        async with self.store.locked(self.CATEGORIES_TABLE):
            if await self.store.find_row(self.CATEGORIES_TABLE, lambda row: row["name"] == name):
                raise DuplicateName("Category", name)
            row = await self.store.append(self.CATEGORIES_TABLE, {
                "category_id": generate_id(CATEGORY),
                "name": name,
                "created_by": user.email,
                "date_created": self.clock(),
                "active": True,
                "document_count": 0,
            })

        category = Category.model_validate(row)
        logger.info(f"Created category {category.category_id} ({name})")
        await self.activity.record(user, "Created Category", category.category_id, f'Created category "{name}"')
        return category

    async def list_categories(self) -> List[Category]:
        """Active categories sorted by name, ignoring case."""
        rows = await self.store.read_all(self.CATEGORIES_TABLE)
        categories = [Category.model_validate(row) for row in rows if row["active"]]
        categories.sort(key=lambda c: (c.name.casefold(), c.name))
        return categories

    async def update_category_count(self, name: Optional[str], delta: int) -> bool:
        """Adjust a category's document count, never below zero."""
        if not name:
            return False
        return await self._adjust(self.CATEGORIES_TABLE, "category_id", "document_count", name, delta)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    async def add_tag(self, user: Identity, name: Optional[str]) -> Tag:
        """Create a tag with a zero usage count."""
        user = require_identity(user)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Tag name is required")
        if "," in name:
            raise ValidationError("Tag names cannot contain commas")

        async with self.store.locked(self.TAGS_TABLE):
            if await self.store.find_row(self.TAGS_TABLE, lambda row: row["name"] == name):
                raise DuplicateName("Tag", name)
            row = await self.store.append(self.TAGS_TABLE, {
                "tag_id": generate_id(TAG),
                "name": name,
                "created_by": user.email,
                "date_created": self.clock(),
                "usage_count": 0,
            })

        tag = Tag.model_validate(row)
        logger.info(f"Created tag {tag.tag_id} ({name})")
        await self.activity.record(user, "Created Tag", tag.tag_id, f'Created tag "{name}"')
        return tag

    async def list_tags(self) -> List[Tag]:
        """All tags, most used first."""
        rows = await self.store.read_all(self.TAGS_TABLE)
        tags = [Tag.model_validate(row) for row in rows]
        tags.sort(key=lambda t: t.usage_count, reverse=True)
        return tags

    async def update_tag_counts(self, tags: Optional[str], delta: int) -> int:
        """Adjust the usage count of every tag in a comma-joined string.

        Returns the number of tag rows that were adjusted.
        """
        adjusted = 0
        # a tag listed twice on one document still counts once
        for name in dict.fromkeys(split_tags(tags)):
            if await self._adjust(self.TAGS_TABLE, "tag_id", "usage_count", name, delta):
                adjusted += 1
        return adjusted

    # ------------------------------------------------------------------

    async def _adjust(self, table: str, key_field: str, field: str, name: str, delta: int) -> bool:
        try:
            row = await self.store.find_row(table, lambda r: r["name"] == name)
            if row is None:
                logger.debug(f"No {table} row named '{name}', counter left alone")
                return False
            return await self.store.increment_cell(table, row[key_field], field, delta, floor=0)
        except Exception as e:
            logger.warning(f"Error updating {field} for '{name}' in {table}: {e}")
            return False

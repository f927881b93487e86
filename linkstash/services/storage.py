"""Supabase persistence for links and vocabulary (categories / tags).

Every query is scoped to a single ``user_id``.  Tables:

- ``links``       id, url, title, description, category, tags[], memo,
                  is_read, read_at, user_id, created_at, updated_at
- ``categories``  id, name, color, description, user_id, created_at, updated_at
- ``tags``        same columns as ``categories``

``name`` is unique per user in both vocabulary tables.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import AsyncClient

from linkstash.exceptions import RecordNotFoundError
from linkstash.models.links import CategorizedLink, LinkCreate, LinkUpdate, VocabularyEntry

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_COLOR = "#3B82F6"
DEFAULT_TAG_COLOR = "#10B981"


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class VocabularyRepository:
    """Category or tag records in one Supabase table."""

    def __init__(self, supabase: AsyncClient, table: str, default_color: str) -> None:
        self.supabase = supabase
        self.table = table
        self.default_color = default_color

    async def find_by_name(self, user_id: str, name: str) -> Optional[VocabularyEntry]:
        result = await (
            self.supabase.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        return VocabularyEntry.from_row(result.data[0]) if result.data else None

    async def create(
        self,
        user_id: str,
        name: str,
        color: Optional[str] = None,
        description: Optional[str] = None,
    ) -> VocabularyEntry:
        result = await (
            self.supabase.table(self.table)
            .insert(
                {
                    "name": name,
                    "color": color or self.default_color,
                    "description": description,
                    "user_id": user_id,
                }
            )
            .execute()
        )
        return VocabularyEntry.from_row(result.data[0])

    async def list_entries(self, user_id: str) -> list[VocabularyEntry]:
        result = await (
            self.supabase.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [VocabularyEntry.from_row(row) for row in result.data]


class LinkRepository:
    """Saved links in the ``links`` table."""

    TABLE = "links"

    def __init__(self, supabase: AsyncClient) -> None:
        self.supabase = supabase

    async def create(self, user_id: str, link: LinkCreate) -> CategorizedLink:
        result = await (
            self.supabase.table(self.TABLE)
            .insert(
                {
                    "url": link.url,
                    "title": link.title,
                    "description": link.description,
                    "category": link.category,
                    "tags": link.tags,
                    "memo": link.memo,
                    "is_read": False,
                    "read_at": None,
                    "user_id": user_id,
                }
            )
            .execute()
        )
        return CategorizedLink.from_row(result.data[0])

    async def get(self, user_id: str, link_id: str) -> CategorizedLink:
        result = await (
            self.supabase.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("id", link_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            raise RecordNotFoundError(f"Link not found: {link_id}")
        return CategorizedLink.from_row(result.data[0])

    async def list_links(
        self,
        user_id: str,
        *,
        category: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[CategorizedLink]:
        query = self.supabase.table(self.TABLE).select("*").eq("user_id", user_id)
        if category:
            query = query.eq("category", category)
        if tag:
            query = query.contains("tags", [tag])
        result = await query.order("created_at", desc=True).execute()
        return [CategorizedLink.from_row(row) for row in result.data]

    async def update(self, user_id: str, link_id: str, updates: LinkUpdate) -> CategorizedLink:
        data = updates.model_dump(exclude_none=True)
        if not data:
            return await self.get(user_id, link_id)
        data["updated_at"] = _utcnow_iso()
        return await self._update(user_id, link_id, data)

    async def toggle_read(self, user_id: str, link_id: str) -> CategorizedLink:
        """Flip ``is_read``; ``read_at`` is set when marking read and cleared otherwise."""
        current = await self.get(user_id, link_id)
        now = _utcnow_iso()
        is_read = not current.is_read
        return await self._update(
            user_id,
            link_id,
            {"is_read": is_read, "read_at": now if is_read else None, "updated_at": now},
        )

    async def read_between(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[CategorizedLink]:
        """Links marked read within ``[start, end]``, most recently read first."""
        result = await (
            self.supabase.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("is_read", True)
            .gte("read_at", start.isoformat())
            .lte("read_at", end.isoformat())
            .order("read_at", desc=True)
            .execute()
        )
        return [CategorizedLink.from_row(row) for row in result.data]

    async def delete(self, user_id: str, link_id: str) -> None:
        result = await (
            self.supabase.table(self.TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("id", link_id)
            .execute()
        )
        if not result.data:
            raise RecordNotFoundError(f"Link not found: {link_id}")

    async def _update(self, user_id: str, link_id: str, data: dict) -> CategorizedLink:
        result = await (
            self.supabase.table(self.TABLE)
            .update(data)
            .eq("user_id", user_id)
            .eq("id", link_id)
            .execute()
        )
        if not result.data:
            raise RecordNotFoundError(f"Link not found: {link_id}")
        return CategorizedLink.from_row(result.data[0])

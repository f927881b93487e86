"""Auto-vocabulary sync: lazily create the category and tags a link uses.

Creation is keyed by name and idempotent.  The sync never raises: it is a
secondary effect of saving or categorizing a link, so persistence errors
are logged and swallowed.
"""

import logging
from typing import Optional, Protocol

from linkstash.db.supabase import get_async_supabase_client
from linkstash.models.links import VocabularyEntry
from linkstash.services.storage import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_TAG_COLOR,
    VocabularyRepository,
)

logger = logging.getLogger(__name__)


class VocabularyStore(Protocol):
    async def find_by_name(self, user_id: str, name: str) -> Optional[VocabularyEntry]: ...

    async def create(self, user_id: str, name: str) -> VocabularyEntry: ...


class VocabularySync:
    """Ensures category and tag records exist for a user."""

    def __init__(self, categories: VocabularyStore, tags: VocabularyStore) -> None:
        self.categories = categories
        self.tags = tags

    async def ensure_vocabulary(self, user_id: str, category: str, tags: list[str]) -> None:
        """Create *category* and each of *tags* if absent. Never raises."""
        if category:
            await self._ensure(self.categories, user_id, category, kind="category")

        seen: set[str] = set()
        for name in tags:
            if not name or name in seen:
                continue
            seen.add(name)
            await self._ensure(self.tags, user_id, name, kind="tag")

    async def _ensure(self, store: VocabularyStore, user_id: str, name: str, *, kind: str) -> None:
        try:
            if await store.find_by_name(user_id, name) is None:
                await store.create(user_id, name)
                logger.info(f"Created {kind} {name!r} for user {user_id}")
        except Exception as e:
            logger.error(f"Vocabulary sync failed for {kind} {name!r}: {e}")


async def get_vocabulary_sync() -> VocabularySync:
    """Build a ``VocabularySync`` over the Supabase ``categories``/``tags`` tables.

    Raises:
        StorageNotConfiguredError: If Supabase is not configured.
    """
    supabase = await get_async_supabase_client()
    return VocabularySync(
        categories=VocabularyRepository(supabase, "categories", DEFAULT_CATEGORY_COLOR),
        tags=VocabularyRepository(supabase, "tags", DEFAULT_TAG_COLOR),
    )

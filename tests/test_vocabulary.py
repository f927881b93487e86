"""Tests for linkstash.services.vocabulary and the vocabulary repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from linkstash.services.storage import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_TAG_COLOR,
    VocabularyRepository,
)
from linkstash.services.vocabulary import VocabularySync


def _make_sync(supabase) -> VocabularySync:
    return VocabularySync(
        categories=VocabularyRepository(supabase, "categories", DEFAULT_CATEGORY_COLOR),
        tags=VocabularyRepository(supabase, "tags", DEFAULT_TAG_COLOR),
    )


@pytest.mark.asyncio
class TestVocabularySync:
    async def test_creates_missing_records(self, fake_supabase):
        await _make_sync(fake_supabase).ensure_vocabulary(
            "user-1", "Technology", ["react", "frontend"]
        )

        categories = fake_supabase.rows("categories")
        tags = fake_supabase.rows("tags")
        assert [c["name"] for c in categories] == ["Technology"]
        assert categories[0]["color"] == "#3B82F6"
        assert categories[0]["user_id"] == "user-1"
        assert sorted(t["name"] for t in tags) == ["frontend", "react"]
        assert {t["color"] for t in tags} == {"#10B981"}

    async def test_idempotent(self, fake_supabase):
        sync = _make_sync(fake_supabase)

        await sync.ensure_vocabulary("user-1", "Technology", ["react"])
        await sync.ensure_vocabulary("user-1", "Technology", ["react", "react"])

        assert len(fake_supabase.rows("categories")) == 1
        assert len(fake_supabase.rows("tags")) == 1

    async def test_scoped_per_user(self, fake_supabase):
        sync = _make_sync(fake_supabase)

        await sync.ensure_vocabulary("user-1", "Design", ["figma"])
        await sync.ensure_vocabulary("user-2", "Design", ["figma"])

        assert {c["user_id"] for c in fake_supabase.rows("categories")} == {"user-1", "user-2"}
        assert len(fake_supabase.rows("tags")) == 2

    async def test_errors_are_swallowed(self):
        categories = MagicMock()
        categories.find_by_name = AsyncMock(side_effect=RuntimeError("db down"))
        tags = MagicMock()
        tags.find_by_name = AsyncMock(return_value=None)
        tags.create = AsyncMock()

        await VocabularySync(categories, tags).ensure_vocabulary("user-1", "Other", ["misc"])

        # The category failure does not stop tag creation
        tags.create.assert_awaited_once_with("user-1", "misc")

    async def test_empty_names_skipped(self):
        categories = MagicMock()
        categories.find_by_name = AsyncMock(return_value=None)
        categories.create = AsyncMock()
        tags = MagicMock()
        tags.find_by_name = AsyncMock(return_value=None)
        tags.create = AsyncMock()

        await VocabularySync(categories, tags).ensure_vocabulary("user-1", "", ["", "x"])

        categories.find_by_name.assert_not_awaited()
        tags.create.assert_awaited_once_with("user-1", "x")


@pytest.mark.asyncio
class TestVocabularyRepository:
    async def test_find_and_list(self, fake_supabase):
        repo = VocabularyRepository(fake_supabase, "tags", DEFAULT_TAG_COLOR)

        assert await repo.find_by_name("user-1", "react") is None
        created = await repo.create("user-1", "react")
        await repo.create("user-1", "vue", color="#000000")

        found = await repo.find_by_name("user-1", "react")
        assert found.id == created.id
        listed = await repo.list_entries("user-1")
        assert [e.name for e in listed] == ["vue", "react"]
        assert listed[0].color == "#000000"

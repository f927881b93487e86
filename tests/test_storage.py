"""Tests for linkstash.services.storage.LinkRepository."""

import typing
from datetime import datetime, timezone

import pytest

from linkstash.exceptions import RecordNotFoundError
from linkstash.models.links import CategorizedLink, LinkCreate
from linkstash.services.storage import LinkRepository


def _link(url: str, **overrides) -> LinkCreate:
    fields = {"title": "Title", "category": "Technology", "tags": ["react"], **overrides}
    return LinkCreate(url=url, **fields)


def test_annotations_resolve():
    """Method annotations use the builtin ``list``, not a same-named method."""
    hints = typing.get_type_hints(LinkRepository.read_between)
    assert hints["return"] == list[CategorizedLink]


@pytest.mark.asyncio
class TestLinkRepository:
    async def test_list_links_filters(self, fake_supabase):
        repo = LinkRepository(fake_supabase)
        await repo.create("user-1", _link("https://a.com"))
        await repo.create("user-1", _link("https://b.com", category="Design", tags=["figma"]))
        await repo.create("user-2", _link("https://c.com"))

        assert [l.url for l in await repo.list_links("user-1")] == ["https://b.com", "https://a.com"]
        assert [l.url for l in await repo.list_links("user-1", category="Technology")] == [
            "https://a.com"
        ]
        assert [l.url for l in await repo.list_links("user-1", tag="figma")] == ["https://b.com"]

    async def test_read_between(self, fake_supabase):
        repo = LinkRepository(fake_supabase)
        link = await repo.create("user-1", _link("https://a.com"))
        await repo.create("user-1", _link("https://b.com"))
        marked = await repo.toggle_read("user-1", link.id)

        assert marked.is_read is True
        found = await repo.read_between(
            "user-1",
            datetime(2000, 1, 1, tzinfo=timezone.utc),
            datetime(2100, 1, 1, tzinfo=timezone.utc),
        )
        assert [l.url for l in found] == ["https://a.com"]

    async def test_delete_missing_raises(self, fake_supabase):
        repo = LinkRepository(fake_supabase)

        with pytest.raises(RecordNotFoundError):
            await repo.delete("user-1", "nope")

    async def test_delete_is_user_scoped(self, fake_supabase):
        repo = LinkRepository(fake_supabase)
        link = await repo.create("user-1", _link("https://a.com"))

        with pytest.raises(RecordNotFoundError):
            await repo.delete("user-2", link.id)
        await repo.delete("user-1", link.id)

        assert fake_supabase.rows("links") == []

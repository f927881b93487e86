"""Saved links and vocabulary router (authenticated)."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import AsyncClient

from linkstash.auth.dependencies import get_current_user
from linkstash.db.supabase import get_async_supabase_client
from linkstash.exceptions import RecordNotFoundError, StorageNotConfiguredError
from linkstash.models.links import CategorizedLink, LinkCreate, LinkUpdate, VocabularyEntry
from linkstash.services.link_pipeline import sync_vocabulary
from linkstash.services.storage import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_TAG_COLOR,
    LinkRepository,
    VocabularyRepository,
)

router = APIRouter(tags=["links"])


async def get_storage() -> AsyncClient:
    """Supabase client dependency; 503 when storage is not configured."""
    try:
        return await get_async_supabase_client()
    except StorageNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/links", response_model=CategorizedLink, status_code=201)
async def create_link(
    link: LinkCreate,
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> CategorizedLink:
    """
    Save a categorized link for the current user.

    The link's category and tags are then added to the user's vocabulary;
    a failure there is logged and does not fail the save.
    """
    user_id = current_user["user_id"]
    saved = await LinkRepository(supabase).create(user_id, link)
    await sync_vocabulary(user_id, saved.category, saved.tags)
    return saved


@router.get("/links", response_model=list[CategorizedLink])
async def list_links(
    category: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> list[CategorizedLink]:
    """List the user's links, newest first, optionally filtered by category or tag."""
    return await LinkRepository(supabase).list_links(
        current_user["user_id"], category=category, tag=tag
    )


@router.get("/links/read", response_model=list[CategorizedLink])
async def list_read_links(
    start: datetime = Query(..., description="Inclusive lower bound on read_at"),
    end: datetime = Query(..., description="Inclusive upper bound on read_at"),
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> list[CategorizedLink]:
    """Links marked read within ``[start, end]``, most recently read first."""
    if end < start:
        raise HTTPException(status_code=400, detail="'end' must not be before 'start'")
    return await LinkRepository(supabase).read_between(current_user["user_id"], start, end)


@router.patch("/links/{link_id}", response_model=CategorizedLink)
async def update_link(
    link_id: str,
    updates: LinkUpdate,
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> CategorizedLink:
    try:
        return await LinkRepository(supabase).update(current_user["user_id"], link_id, updates)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/links/{link_id}/toggle-read", response_model=CategorizedLink)
async def toggle_read(
    link_id: str,
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> CategorizedLink:
    """Flip the read flag; ``read_at`` is stamped when marking read and cleared otherwise."""
    try:
        return await LinkRepository(supabase).toggle_read(current_user["user_id"], link_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/links/{link_id}")
async def delete_link(
    link_id: str,
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> dict:
    try:
        await LinkRepository(supabase).delete(current_user["user_id"], link_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"id": link_id, "status": "deleted"}


@router.get("/categories", response_model=list[VocabularyEntry])
async def list_categories(
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> list[VocabularyEntry]:
    repo = VocabularyRepository(supabase, "categories", DEFAULT_CATEGORY_COLOR)
    return await repo.list_entries(current_user["user_id"])


@router.get("/tags", response_model=list[VocabularyEntry])
async def list_tags(
    current_user: dict = Depends(get_current_user),
    supabase: AsyncClient = Depends(get_storage),
) -> list[VocabularyEntry]:
    repo = VocabularyRepository(supabase, "tags", DEFAULT_TAG_COLOR)
    return await repo.list_entries(current_user["user_id"])

"""Stored link and vocabulary records (Supabase ``links``, ``categories``, ``tags``)."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class CategorizedLink(BaseModel):
    """A saved bookmark."""

    id: str
    url: str
    title: str
    description: Optional[str] = None
    category: str
    tags: list[str] = Field(default_factory=list)
    memo: Optional[str] = None
    is_read: bool = False
    read_at: Optional[datetime] = None
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "CategorizedLink":
        return cls(
            id=row["id"],
            url=row["url"],
            title=row["title"],
            description=row.get("description") or None,
            category=row["category"],
            tags=row.get("tags") or [],
            memo=row.get("memo") or None,
            is_read=bool(row.get("is_read")),
            read_at=row.get("read_at"),
            user_id=row["user_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


class LinkCreate(BaseModel):
    """Body of ``POST /links``."""

    url: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    memo: Optional[str] = None


class LinkUpdate(BaseModel):
    """Body of ``PATCH /links/{link_id}``; omitted fields are left untouched."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    memo: Optional[str] = None


class VocabularyEntry(BaseModel):
    """A category or tag record, unique by name within a user."""

    id: str
    name: str
    color: str
    description: Optional[str] = None
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "VocabularyEntry":
        return cls(
            id=row["id"],
            name=row["name"],
            color=row["color"],
            description=row.get("description") or None,
            user_id=row["user_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

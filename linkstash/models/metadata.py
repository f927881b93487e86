"""Models for the fetch → extract → classify pipeline."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class LinkCategory(str, Enum):
    """Closed category taxonomy used by the classifier."""

    TECHNOLOGY = "Technology"
    DESIGN = "Design"
    BUSINESS = "Business"
    PRODUCTIVITY = "Productivity"
    OTHER = "Other"


CATEGORY_NAMES: list[str] = [c.value for c in LinkCategory]

MAX_TAGS = 3
FALLBACK_TAG = "bookmark"


class ExtractionResult(BaseModel):
    """Title and description scraped from a single URL."""

    title: str = Field(..., description="Page title (non-empty once extraction completes)")
    description: str = Field("", description="Page description, may be empty")


class ClassificationResult(BaseModel):
    """Category and tags assigned to a link."""

    category: LinkCategory = Field(LinkCategory.OTHER, description="Category from the fixed taxonomy")
    tags: list[str] = Field(default_factory=list, description="1-3 lowercase, hyphenated tags")
    source: str = Field(
        "llm", description="Which path produced the result: llm, llm_text or heuristic"
    )


# =============================================================================
# API request / response bodies
# =============================================================================


class UrlRequest(BaseModel):
    """Body of ``POST /api/categorize`` and ``POST /api/extract-title``.

    ``url`` is typed loosely so a missing or non-string value reaches the
    service and is answered with a 400 instead of a schema error.
    """

    url: Optional[Any] = None


class CategorizeResponse(BaseModel):
    category: str
    tags: list[str]
    title: str
    description: Optional[str] = None
    url: str


class ExtractTitleResponse(BaseModel):
    title: str
    description: Optional[str] = None
    url: str

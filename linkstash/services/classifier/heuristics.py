"""Keyword-heuristic classification used when the LLM path fails."""

import re
from typing import Iterable, Optional
from urllib.parse import urlparse

from linkstash.models.metadata import CATEGORY_NAMES, FALLBACK_TAG, MAX_TAGS, LinkCategory
from linkstash.services.classifier.keyword_rules import (
    CATEGORY_RULES,
    MAX_FALLBACK_WORDS,
    MAX_WORD_LENGTH,
    MIN_WORD_LENGTH,
    SITE_GROUP,
    STOPWORDS,
    TAG_GROUPS,
)

_WORD_RE = re.compile(r"\w+(?:[-']\w+)*")


def combined_text(title: str, description: Optional[str] = None) -> str:
    return f"{title or ''} {description or ''}".lower()


def heuristic_tags(
    title: str,
    description: Optional[str] = None,
    url: Optional[str] = None,
) -> list[str]:
    """Derive up to three tags from keywords in *title* and *description*.

    Each keyword group contributes at most one tag (its first matching
    rule).  When *url* is given its host is also checked against known
    hosting platforms.  With no keyword hits at all, up to two meaningful
    words from the title are used instead.
    """
    text = combined_text(title, description)
    tags: list[str] = []
    for group in TAG_GROUPS:
        label = group.first_match(text)
        if label and label not in tags:
            tags.append(label)

    if url:
        host = (urlparse(url).hostname or "").lower()
        label = SITE_GROUP.first_match(host)
        if label and label not in tags:
            tags.append(label)

    if not tags:
        tags = meaningful_words(title)

    return tags[:MAX_TAGS]


def meaningful_words(title: str, limit: int = MAX_FALLBACK_WORDS) -> list[str]:
    """Return up to *limit* title words of length 4-14 that are not stopwords."""
    words: list[str] = []
    for word in _WORD_RE.findall((title or "").lower()):
        if not (MIN_WORD_LENGTH < len(word) < MAX_WORD_LENGTH):
            continue
        if word in STOPWORDS or word.isdigit() or word in words:
            continue
        words.append(word)
        if len(words) >= limit:
            break
    return words


def heuristic_category(title: str, description: Optional[str] = None) -> LinkCategory:
    """Return the first category whose keywords appear, else ``Other``."""
    text = combined_text(title, description)
    for rule in CATEGORY_RULES:
        if rule.pattern.search(text):
            return LinkCategory(rule.label)
    return LinkCategory.OTHER


def category_in_text(text: str) -> Optional[LinkCategory]:
    """Return the category name that appears earliest in free text, if any."""
    best: Optional[tuple[int, str]] = None
    for name in CATEGORY_NAMES:
        match = re.search(rf"\b{name}\b", text or "")
        if match and (best is None or match.start() < best[0]):
            best = (match.start(), name)
    return LinkCategory(best[1]) if best else None


def match_category(value: object) -> Optional[LinkCategory]:
    """Map an LLM-supplied category to the taxonomy (case-insensitive)."""
    if not isinstance(value, str):
        return None
    wanted = value.strip().lower()
    for name in CATEGORY_NAMES:
        if name.lower() == wanted:
            return LinkCategory(name)
    return None


def normalize_tags(raw: Iterable[object]) -> list[str]:
    """Lowercase, hyphenate whitespace, drop empties and duplicates, cap at three."""
    tags: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        tag = "-".join(item.strip().lower().split())
        if tag and tag not in tags:
            tags.append(tag)
    return tags[:MAX_TAGS]


def ensure_tags(tags: list[str]) -> list[str]:
    """Guarantee at least one tag."""
    return tags if tags else [FALLBACK_TAG]

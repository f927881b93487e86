"""LLM-backed link classifier with keyword-heuristic fallbacks.

Flow for one link:

1. Ask Claude for ``{"category": ..., "tags": [...]}`` with a fixed prompt.
2. Strip code fences and parse strictly.  If that fails, keep the LLM's
   category guess by searching the raw text for a literal category name
   and derive tags from keywords instead.
3. If the request itself fails, classify both category and tags from
   keywords alone.

Whatever path is taken the result holds a taxonomy category and 1-3 tags.
"""

import asyncio
import logging
from typing import Any, Optional

import anthropic
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from linkstash.config import get_settings
from linkstash.exceptions import ClassifierNotConfiguredError
from linkstash.models.metadata import ClassificationResult, LinkCategory
from linkstash.services.classifier.heuristics import (
    category_in_text,
    ensure_tags,
    heuristic_category,
    heuristic_tags,
    match_category,
    normalize_tags,
)
from linkstash.services.classifier.llm_utils import parse_json_response

logger = logging.getLogger(__name__)

# Singleton state
_classifier: Optional["LinkClassifier"] = None

SYSTEM_PROMPT = """You classify bookmarked web pages for a personal reading list.

Choose exactly ONE category from this closed list:
- Technology: software, programming, AI, cloud, infrastructure, gadgets
- Design: UI/UX, visual and product design, typography, design tools
- Business: startups, marketing, strategy, finance, product management
- Productivity: workflows, tools, habits, learning, self-improvement
- Other: anything that fits none of the above

Then write 1 to 3 tags:
- Prefer broad, reusable topics ("react", "machine-learning") over very specific ones
- Lowercase only; join multiple words with hyphens
- Never use filler tags such as "article", "blog", "post", "website", "link" or "general"

Respond with JSON only, no prose and no code fences:
{"category": "<one of Technology|Design|Business|Productivity|Other>", "tags": ["tag-one", "tag-two"]}"""


def build_user_prompt(title: str, description: str, hostname: str) -> str:
    return (
        f"Title: {title or '(none)'}\n"
        f"Description: {description or '(none)'}\n"
        f"Site: {hostname or '(unknown)'}"
    )


def parse_classification(raw_text: str) -> ClassificationResult:
    """Parse an LLM reply into a :class:`ClassificationResult`.

    Raises:
        ValueError: If the reply is not JSON or does not match the schema
            (``json.JSONDecodeError`` is a ``ValueError``).
    """
    data = parse_json_response(raw_text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    category = match_category(data.get("category"))
    if category is None:
        raise ValueError(f"Unknown category: {data.get('category')!r}")

    tags = data.get("tags")
    if not isinstance(tags, list):
        raise ValueError("'tags' must be a list")

    return ClassificationResult(category=category, tags=normalize_tags(tags), source="llm")


class LinkClassifier:
    """Classifies a link into the fixed taxonomy plus a few tags."""

    def __init__(
        self,
        client: anthropic.AsyncAnthropic,
        model: str,
        *,
        max_tokens: int = 300,
        timeout: float = 15.0,
    ) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def classify(
        self,
        title: str,
        description: str = "",
        hostname: str = "",
        url: Optional[str] = None,
    ) -> ClassificationResult:
        """Classify a page.  Never raises; degrades to keyword heuristics."""
        try:
            raw_text = await asyncio.wait_for(
                self._call_llm(build_user_prompt(title, description, hostname)),
                timeout=self.timeout,
            )
        except Exception as e:
            logger.warning(f"LLM classification request failed, using heuristics: {e}")
            return ClassificationResult(
                category=heuristic_category(title, description),
                tags=ensure_tags(heuristic_tags(title, description, url)),
                source="heuristic",
            )

        try:
            result = parse_classification(raw_text)
        except ValueError as e:
            logger.warning(f"Unparseable LLM classification ({e}); raw reply: {raw_text[:200]!r}")
            category = category_in_text(raw_text) or heuristic_category(title, description)
            return ClassificationResult(
                category=category,
                tags=ensure_tags(heuristic_tags(title, description, url)),
                source="llm_text",
            )

        if not result.tags:
            result.tags = heuristic_tags(title, description, url)
        result.tags = ensure_tags(result.tags)
        return result

    @retry(
        retry=retry_if_exception_type(
            (anthropic.RateLimitError, anthropic.APITimeoutError)
        ),
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    async def _call_llm(self, user_content: str) -> str:
        """Call the Anthropic API and return the reply text.

        Retried once on rate-limit or timeout errors; the caller's
        ``wait_for`` bounds the total time spent including the retry.
        """
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": user_content}],
        )
        return "".join(_block_text(block) for block in response.content)


def _block_text(block: Any) -> str:
    return getattr(block, "text", "") or ""


# =====================================================================
# Singleton factory
# =====================================================================


def get_link_classifier() -> LinkClassifier:
    """Get or create the singleton ``LinkClassifier``.

    Raises:
        ClassifierNotConfiguredError: If no Anthropic API key is set.
    """
    global _classifier
    if _classifier is not None:
        return _classifier

    settings = get_settings()
    if not settings.anthropic_api_key:
        raise ClassifierNotConfiguredError("ANTHROPIC_API_KEY is required for categorization")

    client = anthropic.AsyncAnthropic(
        api_key=settings.anthropic_api_key,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )
    _classifier = LinkClassifier(
        client,
        settings.claude_model,
        max_tokens=settings.classifier_max_tokens,
        timeout=settings.llm_timeout_seconds,
    )
    return _classifier


def reset_link_classifier() -> None:
    """Reset classifier for testing."""
    global _classifier
    _classifier = None

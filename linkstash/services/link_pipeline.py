"""Orchestrator for the categorize / extract-title flows.

validate URL → fetch (generic profiles or a site extractor) → extract
metadata → classify → sync vocabulary.  Holds no per-request state.
"""

import logging
from typing import Callable, Optional
from urllib.parse import urlparse

from linkstash.config import get_settings
from linkstash.exceptions import FetchError, InvalidUrlError, StorageNotConfiguredError
from linkstash.models.metadata import (
    CategorizeResponse,
    ExtractionResult,
    ExtractTitleResponse,
)
from linkstash.services.classifier.classifier import LinkClassifier, get_link_classifier
from linkstash.services.scraper.fetcher import PageFetcher
from linkstash.services.scraper.metadata_extractor import (
    extract_metadata,
    hostname_of,
    synthesize_from_url,
)
from linkstash.services.scraper.site_extractors import (
    SiteExtractor,
    default_site_extractors,
    find_site_extractor,
)
from linkstash.services.vocabulary import get_vocabulary_sync

logger = logging.getLogger(__name__)

MISSING_URL_MESSAGE = "Please provide a valid URL"
INVALID_URL_MESSAGE = "Please enter a valid URL (e.g., https://example.com)"

# Singleton state
_pipeline: Optional["LinkPipeline"] = None


def validate_url(value: object) -> str:
    """Return the stripped URL or raise :class:`InvalidUrlError`.

    Only absolute ``http``/``https`` URLs with a host are accepted.
    """
    if not value or not isinstance(value, str) or not value.strip():
        raise InvalidUrlError(MISSING_URL_MESSAGE)
    url = value.strip()
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError:
        raise InvalidUrlError(INVALID_URL_MESSAGE) from None
    if parsed.scheme.lower() not in ("http", "https") or not host:
        raise InvalidUrlError(INVALID_URL_MESSAGE)
    return url


class LinkPipeline:
    """Runs the fetch → extract → classify sequence for one URL."""

    def __init__(
        self,
        fetcher: PageFetcher,
        site_extractors: list[SiteExtractor],
        *,
        classifier_factory: Callable[[], LinkClassifier] = get_link_classifier,
    ) -> None:
        self.fetcher = fetcher
        self.site_extractors = site_extractors
        self._classifier_factory = classifier_factory

    async def extract(self, url: str, *, synthesize_on_failure: bool) -> ExtractionResult:
        """Scrape title/description for an already-validated URL.

        Site-specific domains always succeed.  Elsewhere a fetch failure
        either yields a URL-derived result or re-raises :class:`FetchError`.
        """
        site = find_site_extractor(url, self.site_extractors)
        if site is not None:
            return await site.extract(url, self.fetcher)

        try:
            page = await self.fetcher.fetch(url)
        except FetchError as e:
            if not synthesize_on_failure:
                raise
            logger.warning(f"Falling back to URL-derived title for {url}: {e} ({e.last_error!r})")
            return synthesize_from_url(url)

        return extract_metadata(page.html, url)

    async def categorize(self, url_value: object, user_id: Optional[str] = None) -> CategorizeResponse:
        """Validate, scrape and classify a URL.

        Raises:
            InvalidUrlError: Missing or non-http(s) URL.
            ClassifierNotConfiguredError: No LLM API key configured.
            FetchError: Content could not be retrieved (generic domains only).
        """
        url = validate_url(url_value)
        classifier = self._classifier_factory()

        extraction = await self.extract(url, synthesize_on_failure=False)
        result = await classifier.classify(
            extraction.title,
            extraction.description,
            hostname_of(url),
            url=url,
        )
        logger.info(
            f"Categorized {url} as {result.category.value} {result.tags} (via {result.source})"
        )

        if user_id:
            await sync_vocabulary(user_id, result.category.value, result.tags)

        return CategorizeResponse(
            category=result.category.value,
            tags=result.tags,
            title=extraction.title,
            description=extraction.description,
            url=url,
        )

    async def extract_title(self, url_value: object) -> ExtractTitleResponse:
        """Validate and scrape a URL; never fails on scrape errors.

        Raises:
            InvalidUrlError: Missing or non-http(s) URL.
        """
        url = validate_url(url_value)
        extraction = await self.extract(url, synthesize_on_failure=True)
        return ExtractTitleResponse(
            title=extraction.title,
            description=extraction.description,
            url=url,
        )


async def sync_vocabulary(user_id: str, category: str, tags: list[str]) -> None:
    """Run the vocabulary sync for a user; skipped when storage is not configured."""
    try:
        sync = await get_vocabulary_sync()
    except StorageNotConfiguredError:
        logger.warning("Supabase not configured - skipping vocabulary sync")
        return
    except Exception as e:
        logger.error(f"Could not open vocabulary storage: {e}")
        return
    await sync.ensure_vocabulary(user_id, category, tags)


# =====================================================================
# Singleton factory
# =====================================================================


def get_link_pipeline() -> LinkPipeline:
    """Get or create the singleton ``LinkPipeline``."""
    global _pipeline
    if _pipeline is None:
        settings = get_settings()
        _pipeline = LinkPipeline(
            fetcher=PageFetcher(timeout=settings.fetch_timeout_seconds),
            site_extractors=default_site_extractors(settings.site_fetch_timeout_seconds),
        )
    return _pipeline


def reset_link_pipeline() -> None:
    """Reset pipeline for testing."""
    global _pipeline
    _pipeline = None

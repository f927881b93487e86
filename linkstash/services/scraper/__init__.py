"""Scraper package: profile-cascading fetch and page metadata extraction."""

from linkstash.services.scraper.fetcher import FetchedPage, PageFetcher
from linkstash.services.scraper.metadata_extractor import (
    extract_metadata,
    synthesize_from_url,
)
from linkstash.services.scraper.site_extractors import (
    BrunchExtractor,
    SiteExtractor,
    default_site_extractors,
    find_site_extractor,
)

__all__ = [
    "FetchedPage",
    "PageFetcher",
    "extract_metadata",
    "synthesize_from_url",
    "BrunchExtractor",
    "SiteExtractor",
    "default_site_extractors",
    "find_site_extractor",
]

"""Pure-Python HTML → :class:`ExtractionResult` extractor.

No network calls.  Title falls back through Open Graph, Twitter Card,
``<title>``, first ``<h1>`` and finally the URL hostname, so the result
always carries a non-empty title.  Description may be empty.
"""

from typing import Optional
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup

from linkstash.models.metadata import ExtractionResult
from linkstash.services.scraper.constants import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH


def clean_text(value: Optional[str]) -> str:
    """Collapse internal whitespace and strip."""
    if not value:
        return ""
    return " ".join(value.split())


def meta_content(soup: BeautifulSoup, key: str) -> str:
    """Return the ``content`` of ``<meta property=key>`` or ``<meta name=key>``."""
    for attr in ("property", "name"):
        tag = soup.find("meta", attrs={attr: key})
        if tag is not None:
            content = clean_text(tag.get("content"))
            if content:
                return content
    return ""


def first_text(soup: BeautifulSoup, selectors: list[str]) -> str:
    """Return the text of the first selector that matches non-empty content."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None:
            text = clean_text(element.get_text(" ", strip=True))
            if text:
                return text
    return ""


def hostname_of(url: str) -> str:
    host = urlparse(url).hostname or ""
    return host[4:] if host.startswith("www.") else host


def extract_metadata(html: str, url: str) -> ExtractionResult:
    """Extract title and description from already-fetched *html*. Never raises."""
    soup = BeautifulSoup(html or "", "html.parser")

    title = (
        meta_content(soup, "og:title")
        or meta_content(soup, "twitter:title")
        or first_text(soup, ["title"])
        or first_text(soup, ["h1"])
        or hostname_of(url)
        or url
    )
    description = (
        meta_content(soup, "og:description")
        or meta_content(soup, "twitter:description")
        or meta_content(soup, "description")
    )

    return ExtractionResult(
        title=title[:MAX_TITLE_LENGTH],
        description=description[:MAX_DESCRIPTION_LENGTH],
    )


def synthesize_from_url(url: str) -> ExtractionResult:
    """Build a deterministic title/description from the URL alone.

    Used when a page cannot be fetched but a title must still be returned.
    """
    host = hostname_of(url) or url
    segments = [s for s in urlparse(url).path.split("/") if s]
    if segments:
        slug = unquote(segments[-1]).rsplit(".", 1)[0]
        words = clean_text(slug.replace("-", " ").replace("_", " "))
        title = f"{words} - {host}" if words else host
    else:
        title = host
    return ExtractionResult(title=title[:MAX_TITLE_LENGTH], description=f"Saved from {host}")

"""Named constants for the scraper package.

Request profiles are immutable and tried strictly in order by
:class:`~linkstash.services.scraper.fetcher.PageFetcher`.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class RequestProfile:
    """One header/user-agent combination for a GET attempt."""

    name: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


_ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

# ---------------------------------------------------------------------------
# Generic request profiles (tried in this order)
# ---------------------------------------------------------------------------
DESKTOP_CHROME = RequestProfile(
    name="desktop-chrome",
    headers={
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept": _ACCEPT_HTML,
        "Accept-Language": "ko-KR,ko;q=0.9,en;q=0.8",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    },
)
WINDOWS_CHROME = RequestProfile(
    name="windows-chrome",
    headers={
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
        ),
        "Accept": _ACCEPT_HTML,
        "Accept-Language": "en-US,en;q=0.9",
    },
)
MOBILE_SAFARI = RequestProfile(
    name="mobile-safari",
    headers={
        "User-Agent": (
            "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
        ),
        "Accept": _ACCEPT_HTML,
    },
)
# Link-preview crawlers are commonly served the OG tags even by bot-hostile sites
LINK_PREVIEW_BOT = RequestProfile(
    name="link-preview-bot",
    headers={
        "User-Agent": "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)",
        "Accept": "*/*",
    },
)

DEFAULT_PROFILES: tuple[RequestProfile, ...] = (
    DESKTOP_CHROME,
    WINDOWS_CHROME,
    MOBILE_SAFARI,
    LINK_PREVIEW_BOT,
)

# ---------------------------------------------------------------------------
# Brunch (brunch.co.kr): single dedicated profile
# ---------------------------------------------------------------------------
BRUNCH_HOST = "brunch.co.kr"
BRUNCH_PROFILE = RequestProfile(
    name="brunch",
    headers={
        "User-Agent": DESKTOP_CHROME.headers["User-Agent"],
        "Accept": _ACCEPT_HTML,
        "Accept-Language": "ko-KR,ko;q=0.9",
        "Referer": "https://brunch.co.kr/",
    },
)
BRUNCH_TITLE_SUFFIXES = (" - brunch", " | 브런치스토리", "| 브런치스토리", " - 브런치스토리")

# ---------------------------------------------------------------------------
# Content limits (characters)
# ---------------------------------------------------------------------------
MAX_TITLE_LENGTH = 300
MAX_DESCRIPTION_LENGTH = 1_000

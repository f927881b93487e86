"""HTTP fetcher that walks an ordered list of request profiles.

All attempts share one deadline: the timeout bounds the whole sequence,
not each profile.  Profiles are tried strictly one after another.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import httpx

from linkstash.exceptions import FetchError
from linkstash.services.scraper.constants import DEFAULT_PROFILES, RequestProfile

logger = logging.getLogger(__name__)


@dataclass
class FetchedPage:
    """The successful response for a single URL."""

    url: str
    html: str
    status_code: int
    profile: str


class PageFetcher:
    """Fetches a page, falling through request profiles until one returns 2xx."""

    def __init__(
        self,
        profiles: Sequence[RequestProfile] = DEFAULT_PROFILES,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.profiles = tuple(profiles)
        self.timeout = timeout
        self._transport = transport

    async def fetch(
        self,
        url: str,
        *,
        profiles: Optional[Sequence[RequestProfile]] = None,
        timeout: Optional[float] = None,
    ) -> FetchedPage:
        """GET *url* with each profile in order until one succeeds.

        Args:
            url: Absolute http(s) URL.
            profiles: Override the instance's profile list (e.g. a single
                site-specific profile).
            timeout: Override the shared deadline in seconds.

        Returns:
            The first successful :class:`FetchedPage`.

        Raises:
            FetchError: On deadline expiry or when every profile failed.
                ``last_error`` holds the last underlying exception.
        """
        attempt_profiles = tuple(profiles) if profiles is not None else self.profiles
        deadline = timeout if timeout is not None else self.timeout
        errors: list[BaseException] = []

        async def _attempt_all() -> FetchedPage:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=deadline,
                transport=self._transport,
            ) as client:
                for profile in attempt_profiles:
                    try:
                        response = await client.get(url, headers=dict(profile.headers))
                        response.raise_for_status()
                    except httpx.HTTPError as e:
                        logger.warning(f"Fetch of {url} with profile {profile.name} failed: {e}")
                        errors.append(e)
                        continue

                    logger.info(
                        f"Fetched {url} with profile {profile.name} "
                        f"({response.status_code}, {len(response.content)} bytes)"
                    )
                    return FetchedPage(
                        url=str(response.url),
                        html=response.text,
                        status_code=response.status_code,
                        profile=profile.name,
                    )

            raise FetchError(
                f"All {len(attempt_profiles)} request profiles failed for {url}",
                last_error=_last_or_synthetic(errors),
            )

        try:
            return await asyncio.wait_for(_attempt_all(), timeout=deadline)
        except asyncio.TimeoutError as e:
            logger.warning(f"Fetching {url} timed out after {deadline}s")
            raise FetchError(
                f"Timed out after {deadline}s fetching {url}",
                last_error=_last_or_synthetic(errors),
            ) from e


def _last_or_synthetic(errors: list[BaseException]) -> BaseException:
    if errors:
        return errors[-1]
    return RuntimeError("All fetch attempts failed")

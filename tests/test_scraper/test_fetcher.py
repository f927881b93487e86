"""Tests for linkstash.services.scraper.fetcher.

``respx`` patches ``httpx`` at the transport layer; slow responses use a
small custom transport so the shared deadline can be exercised.
"""

import asyncio
import time

import httpx
import pytest
import respx

from linkstash.exceptions import FetchError
from linkstash.services.scraper.constants import (
    DEFAULT_PROFILES,
    DESKTOP_CHROME,
    LINK_PREVIEW_BOT,
    WINDOWS_CHROME,
)
from linkstash.services.scraper.fetcher import PageFetcher

URL = "https://example.com/post"
_HTML = "<html><head><title>Hello</title></head></html>"


class SlowTransport(httpx.AsyncBaseTransport):
    """Answers every request after ``delay`` seconds, recording the user agents seen."""

    def __init__(self, delay: float, status_code: int = 200):
        self.delay = delay
        self.status_code = status_code
        self.user_agents: list[str] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.user_agents.append(request.headers.get("User-Agent", ""))
        await asyncio.sleep(self.delay)
        return httpx.Response(self.status_code, text=_HTML, request=request)


@pytest.mark.asyncio
class TestPageFetcher:
    """Profile fall-through and the shared deadline."""

    async def test_first_profile_success(self):
        with respx.mock:
            route = respx.get(URL).mock(return_value=httpx.Response(200, text=_HTML))
            page = await PageFetcher().fetch(URL)

        assert page.html == _HTML
        assert page.status_code == 200
        assert page.profile == DESKTOP_CHROME.name
        assert route.call_count == 1

    async def test_falls_through_to_next_profile_on_non_2xx(self):
        with respx.mock:
            route = respx.get(URL).mock(
                side_effect=[
                    httpx.Response(403, text="Forbidden"),
                    httpx.Response(200, text=_HTML),
                ]
            )
            page = await PageFetcher().fetch(URL)

        assert page.profile == WINDOWS_CHROME.name
        assert route.call_count == 2
        sent = [call.request.headers["User-Agent"] for call in route.calls]
        assert sent == [
            DESKTOP_CHROME.headers["User-Agent"],
            WINDOWS_CHROME.headers["User-Agent"],
        ]

    async def test_connection_error_tries_next_profile(self):
        with respx.mock:
            respx.get(URL).mock(
                side_effect=[
                    httpx.ConnectError("refused"),
                    httpx.ConnectError("refused"),
                    httpx.ConnectError("refused"),
                    httpx.Response(200, text=_HTML),
                ]
            )
            page = await PageFetcher().fetch(URL)

        assert page.profile == LINK_PREVIEW_BOT.name

    async def test_all_profiles_fail_carries_last_error(self):
        with respx.mock:
            route = respx.get(URL).mock(return_value=httpx.Response(503))
            with pytest.raises(FetchError) as exc_info:
                await PageFetcher().fetch(URL)

        assert route.call_count == len(DEFAULT_PROFILES)
        last_error = exc_info.value.last_error
        assert isinstance(last_error, httpx.HTTPStatusError)
        assert last_error.response.status_code == 503

    async def test_profile_override(self):
        with respx.mock:
            route = respx.get(URL).mock(return_value=httpx.Response(404))
            with pytest.raises(FetchError):
                await PageFetcher().fetch(URL, profiles=[LINK_PREVIEW_BOT])

        assert route.call_count == 1
        assert route.calls[0].request.headers["User-Agent"] == LINK_PREVIEW_BOT.headers["User-Agent"]

    async def test_follows_redirects(self):
        with respx.mock:
            respx.get(URL).mock(
                return_value=httpx.Response(301, headers={"Location": "https://example.com/new"})
            )
            respx.get("https://example.com/new").mock(return_value=httpx.Response(200, text=_HTML))
            page = await PageFetcher().fetch(URL)

        assert page.url == "https://example.com/new"

    async def test_deadline_is_shared_across_profiles(self):
        """Four 0.15s attempts exceed a 0.3s budget even though each fits on its own."""
        transport = SlowTransport(delay=0.15, status_code=500)
        fetcher = PageFetcher(timeout=0.3, transport=transport)

        started = time.monotonic()
        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch(URL)
        elapsed = time.monotonic() - started

        assert "Timed out" in str(exc_info.value)
        assert elapsed < 0.55
        assert len(transport.user_agents) < len(DEFAULT_PROFILES)
        assert isinstance(exc_info.value.last_error, httpx.HTTPStatusError)

    async def test_timeout_before_any_attempt_completes(self):
        fetcher = PageFetcher(timeout=0.05, transport=SlowTransport(delay=1.0))

        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch(URL)

        assert exc_info.value.last_error is not None

    async def test_profiles_are_tried_sequentially(self):
        transport = SlowTransport(delay=0.01, status_code=500)
        with pytest.raises(FetchError):
            await PageFetcher(timeout=2.0, transport=transport).fetch(URL)

        assert transport.user_agents == [p.headers["User-Agent"] for p in DEFAULT_PROFILES]

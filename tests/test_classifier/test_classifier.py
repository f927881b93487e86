"""Tests for linkstash.services.classifier.classifier."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest
from tenacity import wait_none

from linkstash.exceptions import ClassifierNotConfiguredError
from linkstash.models.metadata import LinkCategory
from linkstash.services.classifier.classifier import (
    LinkClassifier,
    build_user_prompt,
    get_link_classifier,
    parse_classification,
)

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _reply(text: str) -> SimpleNamespace:
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


def _make_classifier(*, reply: str | None = None, error: Exception | None = None) -> LinkClassifier:
    client = MagicMock()
    if error is not None:
        client.messages.create = AsyncMock(side_effect=error)
    else:
        client.messages.create = AsyncMock(return_value=_reply(reply or ""))
    return LinkClassifier(client, "test-model", max_tokens=300, timeout=5.0)


@pytest.fixture(autouse=True)
def _no_retry_wait():
    with patch.object(LinkClassifier._call_llm.retry, "wait", wait_none()):
        yield


class TestParseClassification:
    def test_fenced_reply(self):
        result = parse_classification(
            '```json\n{"category":"Technology","tags":["react","frontend"]}\n```'
        )
        assert result.category == LinkCategory.TECHNOLOGY
        assert result.tags == ["react", "frontend"]
        assert result.source == "llm"

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            parse_classification('{"category": "Science", "tags": ["physics"]}')

    def test_tags_must_be_list(self):
        with pytest.raises(ValueError):
            parse_classification('{"category": "Design", "tags": "figma"}')

    def test_array_rejected(self):
        with pytest.raises(ValueError):
            parse_classification('["Technology"]')


def test_user_prompt_contains_inputs():
    prompt = build_user_prompt("A title", "", "example.com")
    assert "A title" in prompt
    assert "example.com" in prompt
    assert "(none)" in prompt


@pytest.mark.asyncio
class TestLinkClassifier:
    async def test_llm_success(self):
        classifier = _make_classifier(
            reply='```json\n{"category":"Technology","tags":["react","frontend"]}\n```'
        )

        result = await classifier.classify("React hooks explained", "", "example.com")

        assert result.category == LinkCategory.TECHNOLOGY
        assert result.tags == ["react", "frontend"]
        kwargs = classifier.client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 300
        assert "React hooks explained" in kwargs["messages"][0]["content"]

    async def test_llm_tags_are_normalized_and_capped(self):
        classifier = _make_classifier(
            reply='{"category": "design", "tags": ["UI Design", "Figma", "Color", "Extra"]}'
        )

        result = await classifier.classify("Anything")

        assert result.category == LinkCategory.DESIGN
        assert result.tags == ["ui-design", "figma", "color"]

    async def test_empty_llm_tags_filled_from_heuristics(self):
        classifier = _make_classifier(reply='{"category": "Technology", "tags": []}')

        result = await classifier.classify("Getting started with Docker")

        assert result.tags == ["docker"]

    async def test_network_error_falls_back_to_heuristics(self):
        classifier = _make_classifier(error=anthropic.APIConnectionError(request=_REQUEST))

        result = await classifier.classify("Building a Kubernetes Operator in Go")

        assert result.category == LinkCategory.TECHNOLOGY
        assert "kubernetes" in result.tags
        assert result.source == "heuristic"

    async def test_unparseable_reply_keeps_llm_category(self):
        classifier = _make_classifier(reply="This page is clearly about Business strategy.")

        result = await classifier.classify("Kubernetes at scale", "")

        # Category from the reply text, tags from keywords
        assert result.category == LinkCategory.BUSINESS
        assert result.tags == ["kubernetes"]
        assert result.source == "llm_text"

    async def test_unparseable_reply_without_category_uses_heuristic(self):
        classifier = _make_classifier(reply="I cannot tell.")

        result = await classifier.classify("Figma auto layout tricks")

        assert result.category == LinkCategory.DESIGN
        assert result.source == "llm_text"

    async def test_always_at_least_one_tag(self):
        classifier = _make_classifier(error=anthropic.APIConnectionError(request=_REQUEST))

        result = await classifier.classify("a b c")

        assert result.category == LinkCategory.OTHER
        assert result.tags == ["bookmark"]

    async def test_rate_limit_retried_once(self):
        rate_limited = anthropic.RateLimitError(
            "rate limited",
            response=httpx.Response(429, request=_REQUEST),
            body=None,
        )
        classifier = _make_classifier()
        classifier.client.messages.create = AsyncMock(
            side_effect=[rate_limited, _reply('{"category": "Other", "tags": ["misc"]}')]
        )

        result = await classifier.classify("Whatever")

        assert classifier.client.messages.create.await_count == 2
        assert result.category == LinkCategory.OTHER
        assert result.tags == ["misc"]

    async def test_slow_llm_times_out_to_heuristics(self):
        async def _hang(**_):
            await asyncio.sleep(5)

        classifier = _make_classifier()
        classifier.client.messages.create = AsyncMock(side_effect=_hang)
        classifier.timeout = 0.05

        result = await classifier.classify("Docker in production")

        assert result.source == "heuristic"
        assert result.tags == ["docker"]


class TestGetLinkClassifier:
    def test_missing_key_raises(self):
        with pytest.raises(ClassifierNotConfiguredError):
            get_link_classifier()

    def test_configured_singleton(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")

        first = get_link_classifier()

        assert first is get_link_classifier()
        assert isinstance(first.client, anthropic.AsyncAnthropic)

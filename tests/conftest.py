"""Shared test fixtures."""

from __future__ import annotations

import pytest

from trendfeed.config import Settings
from trendfeed.llm import LLMResponse


@pytest.fixture
def test_settings():
    """Settings with test values - no real API keys."""
    return Settings(
        anthropic_api_key="sk-ant-test-key-1234567890",
        classifier_model="claude-haiku-4-5-20251001",
        followup_model="claude-sonnet-4-5-20250929",
        trends_locales=["IN", "US"],
        shuffle_mode="uniform",
    )


@pytest.fixture
def mock_llm_response():
    """Factory for creating LLMResponse objects."""

    def _make(text: str, input_tokens: int = 100, output_tokens: int = 20):
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            model="claude-haiku-4-5-20251001",
        )

    return _make


@pytest.fixture
def trends_feed_xml():
    """Factory for a daily trends RSS document with the given item titles."""

    def _make(*titles: str) -> str:
        items = "\n".join(
            f"<item>\n<title>{title}</title>\n<ht:approx_traffic>10000+</ht:approx_traffic>\n</item>" for title in titles
        )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<rss version="2.0" xmlns:ht="https://trends.google.com/trends/trendingsearches/daily">\n'
            "<channel>\n"
            "<title>Daily Search Trends</title>\n"
            f"{items}\n"
            "</channel>\n"
            "</rss>\n"
        )

    return _make


@pytest.fixture
def reddit_listing():
    """Factory for a Reddit hot-listing payload with the given post titles."""

    def _make(*titles: str) -> dict:
        return {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": {"title": t}} for t in titles]}}

    return _make

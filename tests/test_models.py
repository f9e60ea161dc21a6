"""Tests for Pydantic data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from trendfeed.models import (
    CATEGORY_VALUES,
    FALLBACK_QUERIES,
    Category,
    CategoryLabel,
    FollowupRequest,
    GeneratedQuestions,
    RedditListing,
)


class TestCategory:
    def test_closed_set(self):
        assert CATEGORY_VALUES == (
            "trending",
            "community",
            "science",
            "tech",
            "travel",
            "politics",
            "health",
            "sports",
            "finance",
            "football",
        )

    def test_label_accepts_enum_values(self):
        assert CategoryLabel(category="finance").category is Category.FINANCE

    def test_label_rejects_unknown(self):
        with pytest.raises(ValidationError):
            CategoryLabel(category="Finance")


class TestFallbackQueries:
    def test_three_items_in_enumeration(self):
        assert len(FALLBACK_QUERIES) == 3
        assert all(q.category in CATEGORY_VALUES for q in FALLBACK_QUERIES)


class TestRedditListing:
    def test_parses_children(self):
        listing = RedditListing.model_validate(
            {"data": {"children": [{"data": {"title": "Hi?", "score": 3}}, {"data": {"title": "Yo?"}}]}}
        )
        assert [p.data.title for p in listing.data.children] == ["Hi?", "Yo?"]

    def test_missing_data_rejected(self):
        with pytest.raises(ValidationError):
            RedditListing.model_validate({"error": 429})


class TestGeneratedQuestions:
    def test_schema_describes_questions(self):
        schema = GeneratedQuestions.model_json_schema()
        assert schema["properties"]["questions"]["type"] == "array"
        assert "message history" in schema["properties"]["questions"]["description"]


class TestFollowupRequest:
    def test_history_passed_verbatim(self):
        history = [{"role": "user", "content": [{"type": "text", "text": "hi"}]}]
        assert FollowupRequest(history=history).history == history

    def test_empty_history_rejected(self):
        with pytest.raises(ValidationError):
            FollowupRequest(history=[])

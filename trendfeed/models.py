"""Pydantic data models - the contracts between sources, the model and the API."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# --- Enums ---


class Category(str, Enum):
    TRENDING = "trending"
    COMMUNITY = "community"
    SCIENCE = "science"
    TECH = "tech"
    TRAVEL = "travel"
    POLITICS = "politics"
    HEALTH = "health"
    SPORTS = "sports"
    FINANCE = "finance"
    FOOTBALL = "football"


CATEGORY_VALUES: tuple[str, ...] = tuple(c.value for c in Category)


# --- Trending queries (served to the search UI) ---


class TrendingQuery(BaseModel):
    icon: str
    text: str
    category: str


FALLBACK_QUERIES: tuple[TrendingQuery, ...] = (
    TrendingQuery(icon="sparkles", text="What causes the Northern Lights?", category=Category.SCIENCE.value),
    TrendingQuery(icon="code", text="Explain quantum computing", category=Category.TECH.value),
    TrendingQuery(icon="globe", text="Most beautiful places in Japan", category=Category.TRAVEL.value),
)


# --- Classifier output ---


class CategoryLabel(BaseModel):
    category: Category


class CategoryBatch(BaseModel):
    categories: list[Category] = Field(..., description="One category per topic, in the order the topics were given.")


# --- Discussion feed (external shape, consumed not owned) ---


class RedditPostData(BaseModel):
    title: str


class RedditPost(BaseModel):
    data: RedditPostData


class RedditListingData(BaseModel):
    children: list[RedditPost] = Field(default_factory=list)


class RedditListing(BaseModel):
    data: RedditListingData


# --- Follow-up questions ---


class GeneratedQuestions(BaseModel):
    questions: list[str] = Field(..., description="The generated questions based on the message history.")


class FollowupRequest(BaseModel):
    history: list[dict[str, Any]] = Field(..., min_length=1)

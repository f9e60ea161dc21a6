"""Reddit hot-listing reader for community questions."""

from __future__ import annotations

import logging

import httpx

from trendfeed.config import Settings
from trendfeed.models import Category, RedditListing, TrendingQuery

logger = logging.getLogger("trendfeed.reddit")

QUESTION_ICON = "question"


def questions_from_listing(listing: RedditListing, max_title_length: int = 50, max_items: int = 15) -> list[TrendingQuery]:
    """Map posts to queries, drop long titles, keep the first ``max_items`` in source order."""
    queries = [
        TrendingQuery(icon=QUESTION_ICON, text=post.data.title, category=Category.COMMUNITY.value)
        for post in listing.data.children
    ]
    return [q for q in queries if len(q.text) <= max_title_length][:max_items]


async def fetch_discussion_questions(client: httpx.AsyncClient, settings: Settings) -> list[TrendingQuery]:
    """Fetch hot discussion titles as trending queries. Returns empty list on failure."""
    try:
        response = await client.get(
            settings.discussion_feed_url,
            params={"limit": settings.discussion_limit},
            headers={"User-Agent": settings.discussion_user_agent},
        )
        response.raise_for_status()
        listing = RedditListing.model_validate(response.json())
        questions = questions_from_listing(
            listing,
            max_title_length=settings.discussion_max_title_length,
            max_items=settings.discussion_max_items,
        )
        logger.info(f"Fetched {len(questions)} community questions from Reddit")
        return questions
    except Exception as e:
        logger.warning(f"Failed to fetch Reddit questions: {e}")
        return []

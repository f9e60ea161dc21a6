"""Trending-query aggregation across locales and sources."""

from __future__ import annotations

import asyncio
import logging
import random
from functools import cmp_to_key

import httpx

from trendfeed.categorizer import classify_title, classify_titles_batch
from trendfeed.config import Settings
from trendfeed.integrations.google_trends import SourceUnavailable, extract_titles, fetch_trends_feed
from trendfeed.integrations.reddit import fetch_discussion_questions
from trendfeed.models import FALLBACK_QUERIES, TrendingQuery

logger = logging.getLogger("trendfeed.aggregator")


async def trends_for_locale(client: httpx.AsyncClient, geo: str, settings: Settings) -> list[TrendingQuery]:
    """Fetch, extract and classify one locale's trends. Returns empty list on any failure."""
    try:
        xml_text = await fetch_trends_feed(client, geo, settings)
        titles = extract_titles(xml_text)

        if settings.batch_classification:
            labels = await classify_titles_batch(titles, settings)
        else:
            labels = await asyncio.gather(*(classify_title(title, settings) for title in titles))

        queries = [
            TrendingQuery(icon=label.value, text=title, category=label.value) for title, label in zip(titles, labels)
        ]
        logger.info(f"Fetched {len(queries)} trends for geo {geo}")
        return queries
    except SourceUnavailable as e:
        logger.warning(f"Google Trends unavailable: {e}")
        return []
    except Exception as e:
        logger.error(f"Failed to fetch Google Trends for geo: {geo}: {e}")
        return []


async def fetch_google_trends(client: httpx.AsyncClient, settings: Settings) -> list[TrendingQuery]:
    """Run every configured locale concurrently and concatenate in locale order."""
    per_locale = await asyncio.gather(*(trends_for_locale(client, geo, settings) for geo in settings.trends_locales))
    return [query for queries in per_locale for query in queries]


def shuffle_queries(
    queries: list[TrendingQuery], mode: str = "biased", rng: random.Random | None = None
) -> list[TrendingQuery]:
    """Return a reordered copy of ``queries``.

    ``biased`` sorts with a comparator that returns a random sign, which is not
    permutation-uniform. ``uniform`` is a Fisher-Yates shuffle.
    """
    rng = rng or random.Random()
    if mode == "uniform":
        shuffled = list(queries)
        rng.shuffle(shuffled)
        return shuffled
    if mode == "biased":
        return sorted(queries, key=cmp_to_key(lambda a, b: rng.random() - 0.5))
    raise ValueError(f"Unknown shuffle mode: {mode!r}")


async def fetch_from_multiple_sources(
    settings: Settings, client: httpx.AsyncClient | None = None
) -> list[TrendingQuery]:
    """Gather every enabled source concurrently, then shuffle the combined list."""
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=settings.fetch_timeout)

    try:
        sources = [fetch_google_trends(client, settings)]
        if settings.discussion_enabled:
            sources.append(fetch_discussion_questions(client, settings))
        results = await asyncio.gather(*sources)
    finally:
        if owns_client:
            await client.aclose()

    all_queries = [query for result in results for query in result]
    logger.info(f"Aggregated {len(all_queries)} trending queries from {len(results)} sources")
    return shuffle_queries(all_queries, mode=settings.shuffle_mode)


def with_fallback(queries: list[TrendingQuery]) -> list[TrendingQuery]:
    """Substitute the static fallback list when nothing was aggregated."""
    if not queries:
        logger.info("No trends aggregated, serving fallback queries")
        return list(FALLBACK_QUERIES)
    return queries

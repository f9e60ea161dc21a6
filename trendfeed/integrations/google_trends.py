"""Google Trends daily RSS feed: fetch per locale and pull out topic titles."""

from __future__ import annotations

import logging
import re

import httpx

from trendfeed.config import Settings

logger = logging.getLogger("trendfeed.google_trends")

DAILY_SUMMARY_HEADING = "Daily Search Trends"

_TITLE_RE = re.compile(rf"<title>(?!{re.escape(DAILY_SUMMARY_HEADING)})(.*?)</title>")


class SourceUnavailable(Exception):
    """A feed could not be fetched (network failure or non-OK status)."""


async def fetch_trends_feed(client: httpx.AsyncClient, geo: str, settings: Settings) -> str:
    """GET the daily trends feed for ``geo`` and return the raw XML text."""
    try:
        response = await client.get(
            settings.trends_feed_url,
            params={"geo": geo},
            headers={"User-Agent": settings.trends_user_agent},
        )
    except httpx.HTTPError as e:
        raise SourceUnavailable(f"Failed to fetch from Google Trends RSS for geo: {geo}") from e

    if not response.is_success:
        raise SourceUnavailable(
            f"Failed to fetch from Google Trends RSS for geo: {geo} (HTTP {response.status_code})"
        )
    return response.text


def extract_titles(xml_text: str) -> list[str]:
    """Return every <title> text in the feed except the daily summary heading."""
    return _TITLE_RE.findall(xml_text)

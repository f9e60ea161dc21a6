"""Trending query suggestions for the search UI."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from trendfeed.aggregator import fetch_from_multiple_sources, with_fallback
from trendfeed.models import TrendingQuery

logger = logging.getLogger("trendfeed.web.trending")

router = APIRouter()


@router.get("/trending", response_model=list[TrendingQuery])
async def trending(request: Request):
    """Shuffled trending queries, or the static fallback when every source came back empty."""
    settings = request.app.state.settings
    try:
        trends = await fetch_from_multiple_sources(settings)
    except Exception as e:
        logger.error(f"Failed to fetch trends: {e}")
        return JSONResponse({"error": "Failed to fetch trends"}, status_code=500)
    return with_fallback(trends)

"""Follow-up question generation endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from trendfeed.followups import generate_trending_queries
from trendfeed.models import FollowupRequest, GeneratedQuestions

logger = logging.getLogger("trendfeed.web.followups")

router = APIRouter()


@router.post("/followups", response_model=GeneratedQuestions)
async def followups(request: Request, body: FollowupRequest):
    settings = request.app.state.settings
    try:
        return await generate_trending_queries(body.history, settings)
    except Exception as e:
        logger.error(f"Follow-up generation failed ({len(body.history)} messages): {e}")
        return JSONResponse({"error": "Failed to generate follow-up questions"}, status_code=500)

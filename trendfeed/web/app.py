"""FastAPI web application factory."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from trendfeed.config import Settings, load_settings

logger = logging.getLogger("trendfeed.web")


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title="trendfeed", description="Trending queries and follow-up questions for search")

    settings = settings or load_settings()
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        """Liveness probe; does not touch the upstream feeds."""
        return {
            "status": "healthy",
            "locales": settings.trends_locales,
            "discussion_enabled": settings.discussion_enabled,
        }

    @app.middleware("http")
    async def access_log_middleware(request: Request, call_next):
        """Log requests that end in an error status."""
        start = time.time()
        response = await call_next(request)
        elapsed_ms = (time.time() - start) * 1000
        if response.status_code >= 400:
            logger.warning(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f}ms)")
        return response

    from trendfeed.web.routes import followups, trending

    app.include_router(trending.router, prefix="/api")
    app.include_router(followups.router, prefix="/api")

    return app

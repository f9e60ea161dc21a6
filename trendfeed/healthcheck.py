"""Health checks for configuration and upstream dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from trendfeed.config import Settings
from trendfeed.integrations.google_trends import extract_titles

logger = logging.getLogger("trendfeed.healthcheck")


@dataclass
class HealthResult:
    name: str
    ok: bool
    message: str


def check_config(settings: Settings) -> HealthResult:
    """Validate all configuration values."""
    errors = settings.validate()
    if errors:
        return HealthResult("config", False, "; ".join(errors))
    return HealthResult("config", True, "All config values valid")


def check_anthropic(settings: Settings) -> HealthResult:
    """Verify Anthropic API key works."""
    if not settings.anthropic_api_key:
        return HealthResult("anthropic", False, "API key not set")
    try:
        import anthropic

        client = anthropic.Anthropic(api_key=settings.anthropic_api_key, max_retries=0)
        # Minimal API call to verify auth
        client.models.list()
        return HealthResult(
            "anthropic", True, f"API key valid, models {settings.classifier_model} / {settings.followup_model}"
        )
    except Exception as e:
        return HealthResult("anthropic", False, f"API error: {e}")


def check_trends_feed(settings: Settings, geo: str) -> HealthResult:
    """Verify the trends feed answers for one locale and still carries titles."""
    name = f"trends:{geo}"
    try:
        resp = httpx.get(
            settings.trends_feed_url,
            params={"geo": geo},
            headers={"User-Agent": settings.trends_user_agent},
            timeout=settings.fetch_timeout or 10,
        )
        resp.raise_for_status()
    except Exception as e:
        return HealthResult(name, False, f"Feed error: {e}")
    titles = extract_titles(resp.text)
    if not titles:
        return HealthResult(name, False, "Feed reachable but no titles found")
    return HealthResult(name, True, f"{len(titles)} titles")


def check_discussion_feed(settings: Settings) -> HealthResult:
    """Verify the discussion feed when it is enabled."""
    if not settings.discussion_enabled:
        return HealthResult("reddit", True, "Disabled (optional)")
    try:
        resp = httpx.get(
            settings.discussion_feed_url,
            params={"limit": settings.discussion_limit},
            headers={"User-Agent": settings.discussion_user_agent},
            timeout=settings.fetch_timeout or 10,
        )
        resp.raise_for_status()
        children = resp.json()["data"]["children"]
        return HealthResult("reddit", True, f"{len(children)} posts")
    except Exception as e:
        return HealthResult("reddit", False, f"Feed error: {e}")


def run_all_checks(settings: Settings) -> list[HealthResult]:
    """Run all health checks and return results."""
    results = [check_config(settings), check_anthropic(settings)]
    results.extend(check_trends_feed(settings, geo) for geo in settings.trends_locales)
    results.append(check_discussion_feed(settings))
    for result in results:
        if not result.ok:
            logger.warning(f"Health check {result.name} failed: {result.message}")
    return results

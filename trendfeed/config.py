"""Configuration loaded from environment variables / .env file."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_TRENDS_FEED_URL = "https://trends.google.com/trends/trendingsearches/daily/rss"
DEFAULT_TRENDS_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_DISCUSSION_FEED_URL = "https://www.reddit.com/r/askreddit/hot.json"

SHUFFLE_MODES = ("biased", "uniform")

_LOCALE_RE = re.compile(r"^[A-Z]{2}$")


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class Settings:
    # Required
    anthropic_api_key: str = ""

    # Claude settings
    classifier_model: str = "claude-haiku-4-5-20251001"
    followup_model: str = "claude-sonnet-4-5-20250929"
    llm_retries: int = 1  # 1 = single shot

    # Trends feed
    trends_locales: list[str] = field(default_factory=lambda: ["IN", "US"])
    trends_feed_url: str = DEFAULT_TRENDS_FEED_URL
    trends_user_agent: str = DEFAULT_TRENDS_USER_AGENT

    # Discussion feed (off until re-enabled by the owner)
    discussion_enabled: bool = False
    discussion_feed_url: str = DEFAULT_DISCUSSION_FEED_URL
    discussion_user_agent: str = "MiniPerplx/1.0"
    discussion_limit: int = 100
    discussion_max_title_length: int = 50
    discussion_max_items: int = 15

    # Aggregation
    batch_classification: bool = False
    shuffle_mode: str = "biased"
    fetch_timeout_seconds: float = 0.0  # 0 = no timeout

    # Web API
    web_host: str = "127.0.0.1"
    web_port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])

    # Logging
    log_level: str = "INFO"

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of error strings (empty = valid)."""
        errors = []

        if not self.anthropic_api_key:
            errors.append("ANTHROPIC_API_KEY is not set")
        elif not self.anthropic_api_key.startswith("sk-ant-"):
            errors.append("ANTHROPIC_API_KEY does not look valid (should start with 'sk-ant-')")

        if not self.trends_locales:
            errors.append("TRENDS_LOCALES must name at least one locale")
        for locale in self.trends_locales:
            if not _LOCALE_RE.match(locale):
                errors.append(f"TRENDS_LOCALES entry must be a two-letter uppercase code, got {locale!r}")

        if self.shuffle_mode not in SHUFFLE_MODES:
            errors.append(f"SHUFFLE_MODE must be one of {', '.join(SHUFFLE_MODES)}, got {self.shuffle_mode!r}")

        if self.llm_retries < 1:
            errors.append(f"LLM_RETRIES must be >= 1, got {self.llm_retries}")

        if self.discussion_limit < 1:
            errors.append(f"DISCUSSION_LIMIT must be >= 1, got {self.discussion_limit}")
        if self.discussion_max_title_length < 1:
            errors.append(f"DISCUSSION_MAX_TITLE_LENGTH must be >= 1, got {self.discussion_max_title_length}")
        if self.discussion_max_items < 1:
            errors.append(f"DISCUSSION_MAX_ITEMS must be >= 1, got {self.discussion_max_items}")

        if self.fetch_timeout_seconds < 0:
            errors.append(f"FETCH_TIMEOUT_SECONDS must be >= 0, got {self.fetch_timeout_seconds}")

        return errors

    @property
    def fetch_timeout(self) -> float | None:
        """Timeout handed to httpx; ``None`` leaves outbound calls unbounded."""
        return self.fetch_timeout_seconds or None


def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
        classifier_model=os.environ.get("CLASSIFIER_MODEL", "claude-haiku-4-5-20251001"),
        followup_model=os.environ.get("FOLLOWUP_MODEL", "claude-sonnet-4-5-20250929"),
        llm_retries=int(os.environ.get("LLM_RETRIES", "1")),
        trends_locales=_env_list("TRENDS_LOCALES", "IN,US"),
        trends_feed_url=os.environ.get("TRENDS_FEED_URL", DEFAULT_TRENDS_FEED_URL),
        trends_user_agent=os.environ.get("TRENDS_USER_AGENT", DEFAULT_TRENDS_USER_AGENT),
        discussion_enabled=_env_bool("DISCUSSION_ENABLED", "false"),
        discussion_feed_url=os.environ.get("DISCUSSION_FEED_URL", DEFAULT_DISCUSSION_FEED_URL),
        discussion_user_agent=os.environ.get("DISCUSSION_USER_AGENT", "MiniPerplx/1.0"),
        discussion_limit=int(os.environ.get("DISCUSSION_LIMIT", "100")),
        discussion_max_title_length=int(os.environ.get("DISCUSSION_MAX_TITLE_LENGTH", "50")),
        discussion_max_items=int(os.environ.get("DISCUSSION_MAX_ITEMS", "15")),
        batch_classification=_env_bool("BATCH_CLASSIFICATION", "false"),
        shuffle_mode=os.environ.get("SHUFFLE_MODE", "biased").lower(),
        fetch_timeout_seconds=float(os.environ.get("FETCH_TIMEOUT_SECONDS", "0")),
        web_host=os.environ.get("WEB_HOST", "127.0.0.1"),
        web_port=int(os.environ.get("WEB_PORT", "8000")),
        cors_origins=_env_list("CORS_ORIGINS", "http://localhost:3000"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )

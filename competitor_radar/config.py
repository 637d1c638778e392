"""
Configuration management for Competitor Radar.
Feed endpoints, fetch timeouts, digest bounds and the optional NewsAPI key.
"""

from functools import lru_cache
from typing import Dict, List

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── Retrieval ──
    # Google News RSS search; {query} is substituted URL-encoded
    feed_search_url: str = Field(
        default="https://news.google.com/rss/search?q={query}&hl=en-US&gl=US&ceid=US:en",
        alias="FEED_SEARCH_URL",
    )
    # Per-attempt timeout. Expiry counts as a transport failure and rotates.
    fetch_timeout_seconds: float = Field(default=10.0, alias="FETCH_TIMEOUT_SECONDS")
    # Overall budget for one multi-competitor call. Stragglers get fallback content.
    digest_deadline_seconds: float = Field(default=60.0, alias="DIGEST_DEADLINE_SECONDS")
    max_concurrent_fetches: int = Field(default=3, alias="MAX_CONCURRENT_FETCHES")
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
        alias="FETCH_USER_AGENT",
    )

    # ── Digest bounds ──
    feed_top_n: int = Field(default=5, alias="FEED_TOP_N")
    updates_per_competitor: int = Field(default=2, alias="UPDATES_PER_COMPETITOR")
    industry_news_limit: int = Field(default=5, alias="INDUSTRY_NEWS_LIMIT")

    # ── NewsAPI (optional, merged ahead of feed items) ──
    newsapi_key: str = Field(default="", alias="NEWSAPI_KEY")
    newsapi_url: str = Field(default="https://newsapi.org/v2/everything", alias="NEWSAPI_URL")

    mock_mode: bool = Field(default=False, alias="MOCK_MODE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# ══════════════════════════════════════════════════════════════════════════════
# FEED ENDPOINTS - tried in this order, rotation persists across calls
# ══════════════════════════════════════════════════════════════════════════════

FEED_ENDPOINTS: List[Dict] = [
    {
        "name": "direct",
        "template": "{url}",
        "proxied": False,
    },
    {
        "name": "allorigins",
        "template": "https://api.allorigins.win/raw?url={url}",
        "proxied": True,
    },
    {
        "name": "corsproxy",
        "template": "https://corsproxy.io/?url={url}",
        "proxied": True,
    },
    {
        "name": "codetabs",
        "template": "https://api.codetabs.com/v1/proxy?quest={url}",
        "proxied": True,
    },
]


def get_feed_endpoints() -> list:
    """Build FeedEndpoint models from FEED_ENDPOINTS."""
    from .schemas import FeedEndpoint
    return [FeedEndpoint(**cfg) for cfg in FEED_ENDPOINTS]


# Industry keys as offered by the setup form, with display labels
INDUSTRY_LABELS = {
    "fintech": "Fintech & Financial Services",
    "healthcare": "Healthcare & MedTech",
    "ecommerce": "E-commerce & Retail",
    "saas": "SaaS & Software",
    "edtech": "Education & EdTech",
    "gaming": "Gaming & Entertainment",
    "travel": "Travel & Hospitality",
    "logistics": "Logistics & Supply Chain",
    "real-estate": "Real Estate & PropTech",
    "foodtech": "Food & Beverage Tech",
    "automotive": "Automotive & Transportation",
    "energy": "Energy & CleanTech",
    "media": "Media & Content",
    "social": "Social & Community",
    "productivity": "Productivity & Workplace",
    "other": "Other",
}


def industry_label(industry: str) -> str:
    """Display label for an industry key; unknown keys are title-cased as-is."""
    key = (industry or "").strip().lower()
    if key in INDUSTRY_LABELS and key != "other":
        return INDUSTRY_LABELS[key]
    return (industry or "").strip().title() or "Industry"

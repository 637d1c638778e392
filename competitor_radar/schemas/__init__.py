"""
Schemas package — data models for Competitor Radar.

  - base.py: ImpactLevel, FetchStatus, FetchOutcome enums
  - news.py: FeedEndpoint, FeedItem, CompetitorUpdate, IndustryNewsItem,
             CompetitorDigest, FetchResult
"""

from competitor_radar.schemas.base import ImpactLevel, FetchStatus, FetchOutcome
from competitor_radar.schemas.news import (
    FeedEndpoint, FeedItem, CompetitorUpdate, IndustryNewsItem,
    CompetitorDigest, FetchResult,
)

__all__ = [
    # base
    "ImpactLevel", "FetchStatus", "FetchOutcome",
    # news
    "FeedEndpoint", "FeedItem", "CompetitorUpdate", "IndustryNewsItem",
    "CompetitorDigest", "FetchResult",
]

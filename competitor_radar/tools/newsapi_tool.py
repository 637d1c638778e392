"""
NewsAPI.org source (optional, keyed).

When NEWSAPI_KEY is set, competitor and industry queries are also sent to
NewsAPI and its articles are merged ahead of the feed items. Without a key
every call returns [] immediately. Errors are logged and yield [] as well:
this source only ever adds items, it never decides fallback on its own.
"""

import logging
from typing import List, Optional

import httpx

from ..config import Settings, get_settings
from ..news.impact_classifier import classify_impact
from ..news.time_buckets import format_relative_time, parse_timestamp
from ..schemas import FeedItem

logger = logging.getLogger(__name__)


def competitor_query(competitor: str, industry: str, focus_area: str) -> str:
    competitor = competitor.strip()
    terms = [t for t in (industry.strip(), focus_area.strip()) if t]
    if not terms:
        return f'"{competitor}"'
    return f'"{competitor}" AND ({" OR ".join(terms)})'


class NewsAPITool:
    """Thin NewsAPI /v2/everything client producing FeedItems."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.settings.newsapi_key)

    async def search(self, query: str, page_size: int = 5) -> List[FeedItem]:
        """Newest-first articles for `query`; [] when disabled or on any error."""
        if not self.enabled:
            return []

        params = {
            "q": query,
            "sortBy": "publishedAt",
            "language": "en",
            "pageSize": page_size,
            "apiKey": self.settings.newsapi_key,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.fetch_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(self.settings.newsapi_url, params=params)
                response.raise_for_status()
                data = response.json()

            articles = data.get("articles") if isinstance(data, dict) else None
            if not isinstance(articles, list):
                raise ValueError(f"unexpected payload shape: {type(data).__name__}")
            items = [item for item in map(self._to_item, articles) if item is not None]
        except Exception as e:
            logger.warning(f"[FAIL] NewsAPI: {e}")
            return []

        logger.info(f"[OK] NewsAPI: {len(items)} articles for {query!r}")
        return items[:page_size]

    @staticmethod
    def _to_item(article) -> Optional[FeedItem]:
        if not isinstance(article, dict):
            return None
        title = str(article.get("title") or "").strip()
        # NewsAPI marks deleted articles with this placeholder title
        if not title or title == "[Removed]":
            return None
        description = article.get("description") or ""
        published = article.get("publishedAt") or ""
        source = article.get("source")
        source_name = source.get("name") if isinstance(source, dict) else None
        return FeedItem(
            title=title,
            source=source_name or "NewsAPI",
            impact=classify_impact(title, str(description)),
            age_label=format_relative_time(published),
            url=article.get("url") or None,
            published_at=parse_timestamp(published),
        )

"""
Digest orchestrator — entry points for competitor and industry digests.

Flow per competitor: NewsAPI (if keyed) + feed fetch with endpoint failover
-> merge -> bound. If neither source produced anything, the competitor gets a
synthesized digest instead. Competitors run concurrently under a semaphore
and an overall deadline; results always come back in input order, and one
competitor's failure never touches the others.
"""

import asyncio
import logging
from functools import lru_cache, partial
from typing import Iterable, List, Optional, Sequence

import httpx

from .config import Settings, get_settings, get_feed_endpoints
from .news.feed_parser import parse_feed
from .schemas import (
    CompetitorDigest, CompetitorUpdate, FeedEndpoint, FeedItem, IndustryNewsItem,
)
from .tools.endpoint_rotator import EndpointRotator
from .tools.feed_fetcher import ResilientFetcher
from .tools.mock_digests import industry_placeholders, synthesize_updates
from .tools.newsapi_tool import NewsAPITool, competitor_query

logger = logging.getLogger(__name__)

FEED_SOURCE_LABEL = "Google News"


def competitor_feed_query(competitor: str, industry: str) -> str:
    return f'"{competitor.strip()}" {industry.strip()}'.strip()


def industry_feed_query(industry: str, focus_area: str) -> str:
    return " ".join(p for p in (industry.strip(), focus_area.strip(), "trends news") if p)


class DigestOrchestrator:
    """Builds competitor and industry digests from live news, with fallback.

    The endpoint rotator lives as long as the orchestrator, so its cursor
    carries over between calls.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        endpoints: Optional[Sequence[FeedEndpoint]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.rotator = EndpointRotator(endpoints if endpoints is not None else get_feed_endpoints())
        self.fetcher = ResilientFetcher(self.rotator, self.settings, transport=transport)
        self.newsapi = NewsAPITool(self.settings, transport=transport)

    def _parser(self, limit: int):
        return partial(parse_feed, default_source=FEED_SOURCE_LABEL, limit=limit)

    # ── Competitor digests ───────────────────────────────────────────────────

    async def get_competitor_digests(
        self,
        competitors: Iterable[str],
        industry: str,
        focus_area: str,
    ) -> List[CompetitorDigest]:
        """One digest per non-blank competitor name, in input order.

        Names come back exactly as given; whitespace only matters for the
        blank check and the search queries.
        """
        names = [c for c in competitors if c and c.strip()]
        if not names:
            return []

        industry = industry or ""
        focus_area = focus_area or ""
        semaphore = asyncio.Semaphore(max(1, self.settings.max_concurrent_fetches))

        async def _limited(name: str) -> List[CompetitorUpdate]:
            async with semaphore:
                return await self._competitor_updates(name, industry, focus_area)

        tasks = [asyncio.ensure_future(_limited(name)) for name in names]
        _, pending = await asyncio.wait(tasks, timeout=self.settings.digest_deadline_seconds)

        if pending:
            logger.warning(
                f"[TIMEOUT] Digest deadline ({self.settings.digest_deadline_seconds:.0f}s) hit, "
                f"{len(pending)}/{len(tasks)} competitors get fallback content"
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        digests = []
        for name, task in zip(names, tasks):
            if task in pending:
                updates = self._fallback_updates(name, industry, focus_area)
            elif task.exception() is not None:
                logger.warning(f"[FAIL] {name}: {task.exception()}")
                updates = self._fallback_updates(name, industry, focus_area)
            else:
                updates = task.result()
            digests.append(CompetitorDigest(competitor=name, updates=updates))

        logger.info(f"Built {len(digests)} competitor digests ({industry or 'no industry'})")
        return digests

    async def _competitor_updates(self, name: str, industry: str, focus_area: str) -> List[CompetitorUpdate]:
        limit = self.settings.updates_per_competitor
        if self.settings.mock_mode:
            return self._fallback_updates(name, industry, focus_area)

        try:
            api_items = await self.newsapi.search(competitor_query(name, industry, focus_area))
            result = await self.fetcher.fetch(
                competitor_feed_query(name, industry),
                self._parser(self.settings.feed_top_n),
            )
        except Exception as e:
            logger.warning(f"[FAIL] {name}: {e}")
            return self._fallback_updates(name, industry, focus_area)

        if not result.ok and not api_items:
            logger.warning(f"[EXHAUSTED] {name}: no live updates after {result.attempts} attempts")
            return self._fallback_updates(name, industry, focus_area)

        items: List[FeedItem] = api_items + result.items
        return [CompetitorUpdate.from_feed_item(name, item) for item in items[:limit]]

    def _fallback_updates(self, name: str, industry: str, focus_area: str) -> List[CompetitorUpdate]:
        return synthesize_updates(name, industry, focus_area, count=self.settings.updates_per_competitor)

    # ── Industry news ────────────────────────────────────────────────────────

    async def get_industry_news(self, industry: str, focus_area: str) -> List[IndustryNewsItem]:
        """Industry headlines; placeholder items when live news is unavailable."""
        industry = industry or ""
        focus_area = focus_area or ""
        if self.settings.mock_mode:
            return industry_placeholders(industry, focus_area)

        try:
            items = await asyncio.wait_for(
                self._industry_items(industry, focus_area),
                timeout=self.settings.digest_deadline_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("[TIMEOUT] Industry news deadline hit")
            items = []
        except Exception as e:
            logger.warning(f"[FAIL] Industry news: {e}")
            items = []

        if not items:
            logger.warning(f"[FALLBACK] Industry news for {industry!r}: using placeholders")
            return industry_placeholders(industry, focus_area)
        return [IndustryNewsItem.from_feed_item(item) for item in items]

    async def _industry_items(self, industry: str, focus_area: str) -> List[FeedItem]:
        limit = self.settings.industry_news_limit
        query = industry_feed_query(industry, focus_area)
        api_items = await self.newsapi.search(query, page_size=10)
        result = await self.fetcher.fetch(query, self._parser(limit))
        return (api_items + result.items)[:limit]

    def get_endpoint_health(self):
        return self.fetcher.get_endpoint_health()


@lru_cache()
def get_orchestrator() -> DigestOrchestrator:
    """Process-wide orchestrator, so rotation state survives between calls."""
    return DigestOrchestrator()

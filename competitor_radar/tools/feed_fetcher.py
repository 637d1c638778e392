"""
Resilient feed fetcher: one attempt per endpoint, failover through the rotation.

Each attempt is classified as a transport failure (connection, DNS, timeout),
a non-success status, an unparsable payload (parse error or zero usable
items), or a success. Anything but success rotates to the next endpoint.
After every endpoint has failed once the fetcher returns an EXHAUSTED result
instead of raising; the orchestrator answers that with fallback content.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import quote_plus

import httpx

from ..config import Settings, get_settings
from ..schemas import FeedEndpoint, FeedItem, FetchOutcome, FetchResult
from .endpoint_rotator import EndpointRotator

logger = logging.getLogger(__name__)

ParseFn = Callable[[bytes], List[FeedItem]]


class ResilientFetcher:
    """Fetch a feed query through an EndpointRotator with failover."""

    def __init__(
        self,
        rotator: EndpointRotator,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rotator = rotator
        self.settings = settings or get_settings()
        self._transport = transport
        self._endpoint_health: Dict[str, Dict[str, Any]] = {}

    def feed_url(self, query: str) -> str:
        """Search feed URL for a query (the URL endpoints wrap)."""
        return self.settings.feed_search_url.replace("{query}", quote_plus(query))

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.fetch_timeout_seconds,
            transport=self._transport,
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent},
        )

    async def fetch(self, query: str, parse: ParseFn) -> FetchResult:
        """Try each endpoint exactly once, starting from the rotator's cursor.

        Returns on the first endpoint whose payload parses into at least one
        item. Each failure moves the shared cursor past that endpoint unless a
        concurrent fetch already did, so the cursor ends on the endpoint that
        last worked.
        """
        total = len(self.rotator)
        endpoints = self.rotator.endpoints
        start = self.rotator.cursor
        feed_url = self.feed_url(query)

        async with self._client() as client:
            for attempt in range(total):
                index = (start + attempt) % total
                endpoint = endpoints[index]
                outcome, items, error = await self._attempt(client, endpoint, feed_url, parse)
                self._record(endpoint, outcome, error, len(items))

                if outcome == FetchOutcome.SUCCESS:
                    logger.info(f"[OK] {endpoint.name}: {len(items)} items for {query!r}")
                    return FetchResult.success(items, attempt + 1, endpoint.name)

                logger.warning(f"[FAIL] {endpoint.name}: {outcome.value} for {query!r} ({error})")
                self.rotator.advance(from_index=index, reason=outcome.value)

        logger.warning(f"[EXHAUSTED] All {total} endpoints failed for {query!r}")
        return FetchResult.exhausted(total)

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        endpoint: FeedEndpoint,
        feed_url: str,
        parse: ParseFn,
    ) -> Tuple[FetchOutcome, List[FeedItem], Optional[str]]:
        url = endpoint.build_url(feed_url)
        timeout = self.settings.fetch_timeout_seconds

        try:
            # httpx timeouts are per network operation; this bounds the whole attempt
            response = await asyncio.wait_for(client.get(url), timeout=timeout)
        except asyncio.TimeoutError:
            return FetchOutcome.TRANSPORT_FAILURE, [], f"timeout after {timeout:.0f}s"
        except httpx.HTTPError as e:
            return FetchOutcome.TRANSPORT_FAILURE, [], f"{type(e).__name__}: {e}"

        if not response.is_success:
            return FetchOutcome.BAD_STATUS, [], f"HTTP {response.status_code}"

        try:
            items = parse(response.content)
        except Exception as e:
            return FetchOutcome.UNPARSABLE, [], f"parse error: {e}"

        if not items:
            return FetchOutcome.UNPARSABLE, [], "no usable items"
        return FetchOutcome.SUCCESS, items, None

    def _record(self, endpoint: FeedEndpoint, outcome: FetchOutcome, error: Optional[str], count: int):
        health = self._endpoint_health.setdefault(endpoint.name, {"consecutive_failures": 0})
        health["last_outcome"] = outcome.value
        if outcome == FetchOutcome.SUCCESS:
            health["last_success"] = datetime.now(timezone.utc).isoformat()
            health["consecutive_failures"] = 0
            health["items_fetched"] = count
        else:
            health["consecutive_failures"] = health.get("consecutive_failures", 0) + 1
            health["last_error"] = error

    def get_endpoint_health(self) -> Dict[str, Dict[str, Any]]:
        """Per-endpoint outcome history for this process."""
        return {name: dict(h) for name, h in self._endpoint_health.items()}

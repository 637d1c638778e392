"""
Endpoint rotation for feed retrieval.

The rotator owns an ordered, non-empty list of endpoints and a cursor. The
cursor is process-scoped state shared by every concurrent fetch. A fetch
snapshots the cursor, walks its own sequence from there, and moves the
cursor past an endpoint only if nobody else has moved it already. It is
never reset after a success: repeated calls keep going to whichever
endpoint last worked.
"""

import logging
import threading
from typing import Iterable, Optional, Tuple

from ..schemas import FeedEndpoint

logger = logging.getLogger(__name__)


class EndpointRotator:
    """Round-robin cursor over feed endpoints.

    Usage:
        rotator = EndpointRotator(get_feed_endpoints())
        start = rotator.cursor
        for i in range(len(rotator)):
            index = (start + i) % len(rotator)
            ...  # on failure
            rotator.advance(from_index=index)
    """

    def __init__(self, endpoints: Iterable[FeedEndpoint], start: int = 0):
        self._endpoints: Tuple[FeedEndpoint, ...] = tuple(endpoints)
        if not self._endpoints:
            raise ValueError("EndpointRotator needs at least one endpoint")
        self._cursor = start % len(self._endpoints)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._endpoints)

    @property
    def endpoints(self) -> Tuple[FeedEndpoint, ...]:
        return self._endpoints

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    def current(self) -> FeedEndpoint:
        with self._lock:
            return self._endpoints[self._cursor]

    def advance(self, from_index: Optional[int] = None, reason: Optional[str] = None) -> FeedEndpoint:
        """Move to the next endpoint (wrapping) and return the current one.

        With from_index, the cursor only moves if it still points at that
        endpoint; a concurrent fetch that already moved it wins.
        """
        with self._lock:
            if from_index is not None and self._cursor != from_index % len(self._endpoints):
                return self._endpoints[self._cursor]
            previous = self._endpoints[self._cursor]
            self._cursor = (self._cursor + 1) % len(self._endpoints)
            nxt = self._endpoints[self._cursor]
        if reason:
            logger.debug(f"Rotating {previous.name} -> {nxt.name} ({reason})")
        return nxt

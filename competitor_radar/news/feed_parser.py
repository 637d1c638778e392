"""
Syndication feed parsing: raw RSS/Atom text -> normalized FeedItems.

Google News (and several proxies serving it) embed the publisher in the
headline: "Acme raises $20M - TechCrunch". clean_title drops that suffix and
extract_source recovers "TechCrunch" from the same string.

A document that cannot be parsed at all yields an empty list; the fetcher
treats that as an unparsable payload and rotates to the next endpoint.
"""

import html
import io
import logging
import re
from typing import List, Optional, Union

import feedparser

from ..schemas import FeedItem
from .impact_classifier import classify_impact
from .time_buckets import format_relative_time, parse_timestamp

logger = logging.getLogger(__name__)

# Spaced separator: " - ", " – ", " — ", " | "
_SEPARATOR = re.compile(r"\s+[-–—|]\s+")
_LEADING_SEPARATOR = re.compile(r"^[-–—|]\s+")
_MAX_SOURCE_LEN = 60
_TAG_RE = re.compile(r"<[^>]+>")


def _split_attribution(title: str):
    """Return (headline, source) when title ends in a source suffix, else None."""
    text = (title or "").strip()
    if not text:
        return None

    lead = _LEADING_SEPARATOR.match(text)
    if lead:
        # Only an attribution left: "- Reuters"
        source = text[lead.end():].strip()
        if source and len(source) <= _MAX_SOURCE_LEN:
            return "", source
        return None

    matches = list(_SEPARATOR.finditer(text))
    if not matches:
        return None
    last = matches[-1]
    source = text[last.end():].strip()
    if not source or len(source) > _MAX_SOURCE_LEN:
        return None
    return text[:last.start()].strip(), source


def clean_title(title: str) -> str:
    """Strip a trailing "<sep><source name>" attribution from a headline."""
    split = _split_attribution(title)
    if split is None:
        return (title or "").strip()
    return split[0]


def extract_source(title: str) -> Optional[str]:
    """Source name from a trailing attribution suffix, or None."""
    split = _split_attribution(title)
    return split[1] if split else None


def strip_html(text: str) -> str:
    if not text:
        return ""
    return html.unescape(_TAG_RE.sub(" ", text)).strip()


def _raw_fields(entry) -> dict:
    """Pull the four raw fields, defaulting each to an empty string."""
    return {
        "title": entry.get("title", "") or "",
        "pub_date": entry.get("published", entry.get("updated", "")) or "",
        "link": entry.get("link", "") or "",
        "description": entry.get("summary", entry.get("description", "")) or "",
    }


def parse_entry(entry, default_source: str) -> Optional[FeedItem]:
    """Normalize one feed entry. Returns None when no headline survives cleaning."""
    raw = _raw_fields(entry)
    title = clean_title(raw["title"])
    if not title:
        return None

    description = strip_html(raw["description"])
    return FeedItem(
        title=title,
        source=extract_source(raw["title"]) or default_source,
        impact=classify_impact(title, description),
        age_label=format_relative_time(raw["pub_date"]),
        url=raw["link"].strip() or None,
        published_at=parse_timestamp(raw["pub_date"]),
    )


def parse_feed(
    document: Union[str, bytes],
    default_source: str = "Google News",
    limit: int = 5,
) -> List[FeedItem]:
    """Parse a feed document into at most `limit` items, in document order."""
    if not document:
        return []
    if isinstance(document, str):
        document = document.encode("utf-8")
    if not document.strip():
        return []

    # A file object, so feedparser never treats the body as a URL or path
    feed = feedparser.parse(io.BytesIO(document))
    if feed.bozo and not feed.entries:
        logger.debug(f"[FEED] Parse error: {feed.get('bozo_exception')}")
        return []

    items: List[FeedItem] = []
    for entry in feed.entries:
        item = parse_entry(entry, default_source)
        if item is None:
            continue
        items.append(item)
        if len(items) >= limit:
            break

    return items

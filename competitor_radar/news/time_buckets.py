"""
Relative-age labels for feed timestamps ("5m ago", "3h ago", "2d ago", "1w ago").

Timestamp quality never blocks the pipeline: anything that cannot be parsed
gets the neutral label "Recently".
"""

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union

logger = logging.getLogger(__name__)

UNKNOWN_AGE_LABEL = "Recently"

_MINUTES_PER_HOUR = 60
_MINUTES_PER_DAY = 24 * _MINUTES_PER_HOUR
_MINUTES_PER_WEEK = 7 * _MINUTES_PER_DAY

_FORMATS = [
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%a, %d %b %Y %H:%M:%S GMT",
]


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse RSS (RFC 822) or ISO 8601 timestamps into aware UTC datetimes."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)

    text = str(value).strip()
    if not text:
        return None

    # RSS pubDate: "Mon, 01 Jan 2024 12:00:00 GMT" / "+0000"
    try:
        return _as_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        pass

    try:
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in _FORMATS:
        try:
            return _as_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue

    logger.debug(f"Unparsable timestamp: {text[:40]!r}")
    return None


def bucket_minutes(minutes: int) -> str:
    if minutes < _MINUTES_PER_HOUR:
        return f"{minutes}m ago"
    if minutes < _MINUTES_PER_DAY:
        return f"{minutes // _MINUTES_PER_HOUR}h ago"
    if minutes < _MINUTES_PER_WEEK:
        return f"{minutes // _MINUTES_PER_DAY}d ago"
    return f"{minutes // _MINUTES_PER_WEEK}w ago"


def format_relative_time(
    value: Union[str, datetime, None],
    now: Optional[datetime] = None,
) -> str:
    """Label how long ago `value` was, relative to `now` (default: current UTC time)."""
    published = parse_timestamp(value)
    if published is None:
        return UNKNOWN_AGE_LABEL

    now = _as_utc(now) if now else datetime.now(timezone.utc)
    # Clock skew can put items slightly in the future
    minutes = max(0, int((now - published).total_seconds() // 60))
    return bucket_minutes(minutes)

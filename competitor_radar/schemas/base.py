"""
Common enums used across the pipeline.

ImpactLevel tags every update shown to the caller. FetchStatus and
FetchOutcome describe what the resilient fetcher saw, per call and per
attempt respectively.
"""

from enum import Enum


class ImpactLevel(str, Enum):
    """Heuristic significance of a news item."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FetchStatus(str, Enum):
    """Result of one full fetch across the endpoint rotation."""
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


class FetchOutcome(str, Enum):
    """Classification of a single retrieval attempt."""
    TRANSPORT_FAILURE = "transport_failure"   # connection, DNS, timeout
    BAD_STATUS = "bad_status"                 # non-2xx response
    UNPARSABLE = "unparsable"                 # malformed or zero usable items
    SUCCESS = "success"

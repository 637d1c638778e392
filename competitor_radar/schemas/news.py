"""
Feed, update and digest data models.

Hierarchy: FeedEndpoint → (fetch) → FeedItem → CompetitorUpdate / IndustryNewsItem

FeedItem is the parser's normalized output. The orchestrator re-labels it
as a CompetitorUpdate (tied to one competitor) or an IndustryNewsItem.
Synthesized fallback content uses the very same models, so callers never
branch on where an update came from.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from urllib.parse import quote

from pydantic import BaseModel, Field, field_validator

from .base import ImpactLevel, FetchStatus


def _require_text(v, field_name: str) -> str:
    text = "" if v is None else str(v).strip()
    if not text:
        raise ValueError(f"{field_name} must not be empty")
    return text


class FeedEndpoint(BaseModel):
    """A retrieval target: the feed URL itself, or a proxy wrapping it.

    template must contain a {url} placeholder. For proxied endpoints the
    feed URL is percent-encoded before substitution.
    """
    name: str
    template: str = "{url}"
    proxied: bool = False

    @field_validator('template')
    @classmethod
    def must_have_placeholder(cls, v):
        if "{url}" not in v:
            raise ValueError("endpoint template needs a {url} placeholder")
        return v

    def build_url(self, feed_url: str) -> str:
        target = quote(feed_url, safe="") if self.proxied else feed_url
        return self.template.replace("{url}", target)

    class Config:
        frozen = True


class FeedItem(BaseModel):
    """One normalized entry from a syndication feed or news API."""
    title: str
    source: str
    impact: ImpactLevel = ImpactLevel.MEDIUM
    age_label: str = "Recently"
    url: Optional[str] = None
    published_at: Optional[datetime] = None

    @field_validator('title', mode='before')
    @classmethod
    def title_not_blank(cls, v):
        return _require_text(v, "title")

    class Config:
        frozen = True
        use_enum_values = True


class CompetitorUpdate(BaseModel):
    """A single digest line about one competitor, live or synthesized."""
    competitor: str
    text: str
    impact: ImpactLevel
    age_label: str
    source: str
    url: Optional[str] = None

    @field_validator('text', mode='before')
    @classmethod
    def text_not_blank(cls, v):
        return _require_text(v, "text")

    @classmethod
    def from_feed_item(cls, competitor: str, item: FeedItem) -> "CompetitorUpdate":
        return cls(
            competitor=competitor,
            text=item.title,
            impact=item.impact,
            age_label=item.age_label,
            source=item.source,
            url=item.url or None,
        )

    class Config:
        frozen = True
        use_enum_values = True


class IndustryNewsItem(BaseModel):
    """Industry-wide headline, not tied to a competitor."""
    title: str
    source: str
    impact: ImpactLevel
    url: Optional[str] = None
    published_at: Optional[datetime] = None

    @field_validator('title', mode='before')
    @classmethod
    def title_not_blank(cls, v):
        return _require_text(v, "title")

    @classmethod
    def from_feed_item(cls, item: FeedItem) -> "IndustryNewsItem":
        return cls(
            title=item.title,
            source=item.source,
            impact=item.impact,
            url=item.url or None,
            published_at=item.published_at,
        )

    class Config:
        frozen = True
        use_enum_values = True


class CompetitorDigest(BaseModel):
    """Bounded, ordered updates for one competitor."""
    competitor: str
    updates: List[CompetitorUpdate] = Field(default_factory=list)


@dataclass(frozen=True)
class FetchResult:
    """What one fetch across the endpoint rotation produced.

    Exactly one of two shapes: SUCCESS with at least one item, or
    EXHAUSTED after every endpoint was tried once and failed.
    """
    status: FetchStatus
    items: List[FeedItem] = field(default_factory=list)
    attempts: int = 0
    endpoint: Optional[str] = None   # name of the endpoint that answered

    @classmethod
    def success(cls, items: List[FeedItem], attempts: int, endpoint: str) -> "FetchResult":
        return cls(FetchStatus.SUCCESS, list(items), attempts, endpoint)

    @classmethod
    def exhausted(cls, attempts: int) -> "FetchResult":
        return cls(FetchStatus.EXHAUSTED, [], attempts, None)

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.SUCCESS

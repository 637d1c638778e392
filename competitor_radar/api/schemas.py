"""API request/response schemas for the digest routes."""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

from competitor_radar.schemas import CompetitorDigest, IndustryNewsItem


class DigestRequest(BaseModel):
    competitors: List[str] = Field(default_factory=list)
    industry: str = ""
    focus_area: str = ""


class DigestResponse(BaseModel):
    digests: List[CompetitorDigest]
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class IndustryNewsResponse(BaseModel):
    items: List[IndustryNewsItem]
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

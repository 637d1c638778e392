"""Digest router -- competitor digests and industry news for the dashboard."""

import logging

from fastapi import APIRouter, Query

from competitor_radar.api.dependencies import Orchestrator
from competitor_radar.api.schemas import DigestRequest, DigestResponse, IndustryNewsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/digests", response_model=DigestResponse)
async def competitor_digests(body: DigestRequest, orchestrator: Orchestrator):
    digests = await orchestrator.get_competitor_digests(
        body.competitors, body.industry, body.focus_area,
    )
    return DigestResponse(digests=digests)


@router.get("/industry-news", response_model=IndustryNewsResponse)
async def industry_news(
    orchestrator: Orchestrator,
    industry: str = Query(default=""),
    focus_area: str = Query(default=""),
):
    items = await orchestrator.get_industry_news(industry, focus_area)
    return IndustryNewsResponse(items=items)

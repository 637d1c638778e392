"""Health check router -- endpoint rotation state and config summary."""

from datetime import datetime, timezone

from fastapi import APIRouter

from competitor_radar.api.dependencies import Orchestrator

router = APIRouter()


@router.get("/health")
async def health(orchestrator: Orchestrator):
    settings = orchestrator.settings
    rotator = orchestrator.rotator

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "rotation": {
            "endpoints": [e.name for e in rotator.endpoints],
            "current": rotator.current().name,
        },
        "endpoint_health": orchestrator.get_endpoint_health(),
        "config": {
            "mock_mode": settings.mock_mode,
            "newsapi_enabled": bool(settings.newsapi_key),
            "fetch_timeout_seconds": settings.fetch_timeout_seconds,
            "digest_deadline_seconds": settings.digest_deadline_seconds,
            "max_concurrent_fetches": settings.max_concurrent_fetches,
            "updates_per_competitor": settings.updates_per_competitor,
            "industry_news_limit": settings.industry_news_limit,
        },
    }

"""
Competitor Radar - HTTP entry point.
FastAPI app serving competitor digests and industry news to the dashboard.

Run: uvicorn competitor_radar.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import digests, health
from .orchestrator import get_orchestrator

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

# Suppress noisy loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    orchestrator = get_orchestrator()
    app.state.orchestrator = orchestrator
    endpoints = ", ".join(e.name for e in orchestrator.rotator.endpoints)
    logger.info(f"Starting Competitor Radar (endpoints: {endpoints})")
    if orchestrator.settings.mock_mode:
        logger.warning("MOCK_MODE is on: all digests are synthesized")
    yield


app = FastAPI(
    title="Competitor Radar",
    description="Competitor and industry news digests with endpoint failover",
    version="1.0.0",
    lifespan=lifespan,
)

# The dashboard is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(digests.router, prefix="/api")

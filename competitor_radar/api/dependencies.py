"""FastAPI dependency injection -- Depends() patterns using app.state from lifespan."""

from typing import Annotated

from fastapi import Depends, Request

from competitor_radar.orchestrator import DigestOrchestrator


def get_app_orchestrator(request: Request) -> DigestOrchestrator:
    return request.app.state.orchestrator


# Type alias for cleaner route signatures
Orchestrator = Annotated[DigestOrchestrator, Depends(get_app_orchestrator)]

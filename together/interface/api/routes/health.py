"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from together.config import Settings
from together.util.time import utc_now

API_VERSION = "0.1.0"

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    git_sha: str
    environment: str
    unbind_sweep_enabled: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Liveness check; reports whether this process runs the unbind sweep."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_now(),
        version=API_VERSION,
        git_sha=settings.git_sha,
        environment=settings.environment,
        unbind_sweep_enabled=settings.unbind.sweep_enabled,
    )

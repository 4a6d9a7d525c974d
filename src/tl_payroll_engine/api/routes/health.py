"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from tl_payroll_engine.calculators.rate_tables import PolicyNotFoundError
from tl_payroll_engine.config import get_settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    engine_version: str
    policy_version: str | None = None


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check() -> HealthResponse:
    """Check that the configured rate tables resolve."""
    settings = get_settings()
    try:
        policy_version: str | None = settings.resolve_policy().version
    except PolicyNotFoundError:
        policy_version = None

    return HealthResponse(
        status="healthy" if policy_version else "degraded",
        timestamp=datetime.now(timezone.utc),
        engine_version=settings.engine_version,
        policy_version=policy_version,
    )


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_check() -> dict[str, str]:
    """Readiness check for container orchestration."""
    return {"status": "ready"}


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}

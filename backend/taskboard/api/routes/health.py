"""Health Probe: liveness endpoint.

Invariants:
    - GET /health always returns 200 if the process is up
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status

from taskboard.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health", response_model=HealthResponse, status_code=status.HTTP_200_OK,
)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

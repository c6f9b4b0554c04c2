"""Health check endpoints."""

from fastapi import APIRouter, Response

from quotaguard.api.deps import Inject
from quotaguard.core.config import settings
from quotaguard.core.health.protocols import HealthServiceProtocol
from quotaguard.schemas.health import LivenessResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=LivenessResponse)
async def health_check() -> LivenessResponse:
    """Liveness: the process is up and serving requests."""
    return LivenessResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    health: HealthServiceProtocol = Inject(HealthServiceProtocol),
) -> ReadinessResponse:
    """Readiness: the usage database is reachable.

    Returns 503 while it is not, since admission fails closed without it.
    """
    result = await health.check_readiness(debug=settings.DEBUG)
    if result.status != "ready":
        response.status_code = 503
    return result

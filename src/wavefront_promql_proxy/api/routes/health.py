from fastapi import APIRouter

from wavefront_promql_proxy.api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Plain health check; never contacts the backend."""
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe, answers while the process is up."""
    return HealthResponse()

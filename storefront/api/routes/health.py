"""Health check endpoints.

Provides health status for container probes and monitoring.
"""

from fastapi import APIRouter

from storefront import __version__
from storefront.api.deps import Store
from storefront.config import settings
from storefront.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check. Returns 200 if the service is running."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready(store: Store) -> HealthResponse:
    """Readiness check.

    Degraded until the catalog has loaded, or while the last refetch failed.
    """
    checks = {
        "catalog_loaded": store.loaded,
        "catalog_fresh": store.error is None,
    }
    all_healthy = all(checks.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@router.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )

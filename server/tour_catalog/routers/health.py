"""Health and readiness router."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import HealthStatus, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Health Check")
async def health_check() -> dict:
    """Liveness probe; does not touch dependencies."""
    return {
        "status": HealthStatus.HEALTHY.value,
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "environment": settings.environment,
    }


@router.get("/ready", summary="Readiness Check", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe; pings the document store."""
    gateway = request.app.state.gateway
    database_ok = await gateway.ping()

    if not database_ok:
        logger.warning("Readiness check failed", extra={"check": "database"})

    response_data = ReadinessResponse(
        status=HealthStatus.READY if database_ok else HealthStatus.UNAVAILABLE,
        service=SERVICE_NAME,
        checks={"database": "ok" if database_ok else "unreachable"},
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response_data.model_dump(mode="json"),
    )


@router.get("/info", summary="Service Information")
async def service_info() -> dict:
    """Describe the service and its main endpoints."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Tour listings catalog with admin management, SEO metadata and testimonials",
        "environment": settings.environment,
        "endpoints": {
            "health": "/health",
            "readiness": "/ready",
            "metrics": "/metrics",
            "docs": "/docs" if settings.debug else None,
        },
    }

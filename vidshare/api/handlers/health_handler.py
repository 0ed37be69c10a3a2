"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from vidshare.config.settings import settings
from vidshare.shared.db import check_database
from vidshare.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready", response_model=HealthResponse)
async def readiness_check():
    """
    Readiness check for Kubernetes/load balancers.

    Ready only when the database answers; 503 otherwise.
    """
    database_ok = await check_database()
    body = HealthResponse(
        status="ready" if database_ok else "unavailable",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
        checks={"database": database_ok},
    )
    if not database_ok:
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
    return body


@router.get("/live")
async def liveness_check():
    """
    Liveness check for Kubernetes.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}

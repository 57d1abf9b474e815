"""
Health check endpoint
"""

from fastapi import APIRouter
from schemas.api import HealthCheckResponse
from core.config import settings
from api import __version__

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Liveness check with environment and version."""
    return HealthCheckResponse(
        environment=settings.ENVIRONMENT,
        version=__version__
    )

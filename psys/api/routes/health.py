"""
Health check and system info routes
"""
from fastapi import APIRouter

from psys.api.schemas.response import HealthResponse
from psys.utils.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint
    The engine has no external dependencies, so it is healthy once imported
    """
    return HealthResponse(status="healthy", version=settings.APP_VERSION)


@router.get("/info")
async def get_api_info():
    """Get API information"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "docs_url": "/docs",
        "openapi_url": "/openapi.json"
    }

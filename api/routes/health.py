"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_app_settings
from shared.config import Settings
from shared.database import supabase_configured

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    ai_provider: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(settings: Settings = Depends(get_app_settings)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports "not_configured" for the parts whose settings are missing.
    Nothing is called over the network.
    """
    storage_ready = settings.storage_backend == "memory" or supabase_configured(settings)
    if settings.ai_provider == "azure_openai":
        ai_ready = bool(settings.azure_openai_endpoint and settings.azure_openai_key)
    else:
        ai_ready = bool(settings.google_api_key)

    if not (storage_ready and ai_ready):
        logger.warning(f"Not ready: storage={storage_ready}, ai={ai_ready}")

    return ReadinessResponse(
        status="ready" if storage_ready and ai_ready else "degraded",
        storage=settings.storage_backend if storage_ready else "not_configured",
        ai_provider=settings.ai_provider if ai_ready else "not_configured",
    )

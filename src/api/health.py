"""Health check endpoints."""

from typing import Annotated, Literal

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.config import Settings, get_settings
from src.modules.businesses.routes import get_business_service
from src.modules.businesses.service import BusinessService

logger = structlog.get_logger()
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["healthy", "unhealthy"]
    version: str
    business_count: int


@router.get("", response_model=HealthResponse)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
    service: Annotated[BusinessService, Depends(get_business_service)],
) -> HealthResponse:
    """Health check endpoint.

    Loads the directory through the configured service. An unreadable
    store still counts as healthy (it reads as empty), so only a missing
    or failing service makes this endpoint answer 503.

    Raises:
        HTTPException: 503 if the directory cannot be reached.
    """
    try:
        count = await service.count()
    except Exception as e:
        logger.error("health_check_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=503,
            detail=f"Service unhealthy: {type(e).__name__}",
        ) from e

    return HealthResponse(
        status="healthy", version=settings.app_version, business_count=count
    )

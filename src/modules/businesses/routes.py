"""Business directory API routes."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from src.api.rate_limit import get_rate_limit_string, limiter
from src.modules.businesses.exceptions import (
    InvalidCategoryError,
    MissingFieldError,
    PersistenceError,
    UnsupportedMethodError,
)
from src.modules.businesses.models import ListingType
from src.modules.businesses.schemas import (
    BusinessCreate,
    BusinessResponse,
    ErrorResponse,
)
from src.modules.businesses.service import BusinessService

logger = structlog.get_logger()

router = APIRouter(prefix="/businesses", tags=["businesses"])


_business_service: BusinessService | None = None


def get_business_service() -> BusinessService:
    """Get the business service instance configured at startup."""
    if _business_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Business service not configured",
        )
    return _business_service


def set_business_service(service: BusinessService | None) -> None:
    """Set the business service instance.

    Called during app startup to configure the service.
    """
    global _business_service
    _business_service = service


def parse_listing_type(value: str | None) -> ListingType | None:
    """Map the ``type`` query value to a listing.

    Returns:
        The listing, or None when no filter was requested.

    Raises:
        UnsupportedMethodError: For any other value.
    """
    if not value:
        return None
    try:
        return ListingType(value)
    except ValueError as e:
        raise UnsupportedMethodError() from e


@router.get(
    "",
    response_model=list[BusinessResponse],
    responses={405: {"model": ErrorResponse}},
    summary="List businesses",
    description="List every business, or only products or services with ?type=.",
)
async def list_businesses(
    service: Annotated[BusinessService, Depends(get_business_service)],
    listing: Annotated[str | None, Query(alias="type")] = None,
) -> list[BusinessResponse]:
    """List registered businesses in registration order."""
    try:
        listing_type = parse_listing_type(listing)
    except UnsupportedMethodError as e:
        logger.info("unsupported_listing_type", listing=listing)
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail=str(e),
        ) from e

    if listing_type is None:
        businesses = await service.list_all()
    else:
        businesses = await service.list_by_category(listing_type.category)

    return [BusinessResponse.from_business(b) for b in businesses]


@router.post(
    "",
    response_model=BusinessResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Register a business",
)
@limiter.limit(get_rate_limit_string)
async def register_business(
    request: Request,  # noqa: ARG001 - required by slowapi
    service: Annotated[BusinessService, Depends(get_business_service)],
    data: Annotated[BusinessCreate | None, Body()] = None,
) -> BusinessResponse:
    """Register a new business in the directory."""
    try:
        business = await service.create(data or BusinessCreate())
    except (MissingFieldError, InvalidCategoryError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    return BusinessResponse.from_business(business)

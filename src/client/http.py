"""HTTP client for the business directory API."""

from typing import Any

import httpx
import structlog

from src.client.exceptions import DirectoryClientError
from src.modules.businesses.models import Business, ListingType

logger = structlog.get_logger()


class DirectoryClient:
    """Async client for the ``/businesses`` resource.

    Responses are decoded into ``Business`` records. Any non-2xx answer
    raises DirectoryClientError with the server's error message.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_prefix: str = "",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Server root, e.g. "http://localhost:8000".
            api_prefix: Prefix the resource is mounted under, e.g. "/api".
            timeout_seconds: Request timeout in seconds.
            transport: Custom transport (tests pass an ASGI transport).
        """
        self._path = f"{api_prefix}/businesses"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def list_businesses(
        self, listing: ListingType | None = None
    ) -> list[Business]:
        """Fetch businesses, optionally only products or services.

        Args:
            listing: Listing to filter on, or None for every business.

        Returns:
            Businesses in registration order.

        Raises:
            DirectoryClientError: The request failed.
        """
        params = {"type": listing.value} if listing else None
        data = await self._request("GET", params=params)
        return [Business.from_dict(item) for item in data]

    async def list_products(self) -> list[Business]:
        """Fetch product businesses."""
        return await self.list_businesses(ListingType.PRODUCTS)

    async def list_services(self) -> list[Business]:
        """Fetch service businesses."""
        return await self.list_businesses(ListingType.SERVICES)

    async def register(self, payload: dict[str, str]) -> Business:
        """Register a business.

        Args:
            payload: Registration fields (name, description, email, phone,
                address, category).

        Returns:
            The created record as stored by the server.

        Raises:
            DirectoryClientError: The server rejected or failed the request.
        """
        data = await self._request("POST", json=payload)
        business = Business.from_dict(data)
        logger.info("business_registered", business_id=business.id)
        return business

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, str] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method, self._path, params=params, json=json
            )
        except httpx.HTTPError as e:
            logger.error(
                "directory_request_failed",
                method=method,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DirectoryClientError(f"Request failed: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "directory_request_rejected",
                method=method,
                status_code=response.status_code,
                error=message,
            )
            raise DirectoryClientError(message, status_code=response.status_code)

        return response.json()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "DirectoryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


def _error_message(response: httpx.Response) -> str:
    """Pull the ``error`` field out of an error response, if present."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return response.reason_phrase

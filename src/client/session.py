"""Headless directory session: view state, form draft and record cache."""

from dataclasses import asdict, dataclass, fields, replace
from enum import StrEnum

import structlog

from src.client.exceptions import DirectoryClientError, DraftIncompleteError
from src.client.http import DirectoryClient
from src.modules.businesses.models import Business, Category

logger = structlog.get_logger()


class View(StrEnum):
    """Screens a directory front end switches between."""

    HOME = "home"
    USER = "user"  # browse chooser
    BUSINESS = "business"  # registration form
    PRODUCTS = "products"
    SERVICES = "services"


@dataclass(frozen=True)
class BusinessDraft:
    """Registration form input as typed so far."""

    name: str = ""
    description: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    category: str = ""

    def missing_fields(self) -> list[str]:
        """Required fields that are still empty."""
        return [
            name
            for name in ("name", "description", "email", "category")
            if not getattr(self, name)
        ]

    def to_payload(self) -> dict[str, str]:
        """Request body for a registration."""
        return asdict(self)


class DirectorySession:
    """Client-side state of one directory user.

    Keeps a local cache of records so views can be switched without
    refetching. A successful registration is appended to the cache as
    returned by the server.
    """

    def __init__(self, client: DirectoryClient) -> None:
        self._client = client
        self.view = View.HOME
        self.businesses: list[Business] = []
        self.draft = BusinessDraft()
        self.loading = False
        self.submitting = False

    @property
    def products(self) -> list[Business]:
        """Cached product businesses."""
        return [b for b in self.businesses if b.category == Category.PRODUCT]

    @property
    def services(self) -> list[Business]:
        """Cached service businesses."""
        return [b for b in self.businesses if b.category == Category.SERVICE]

    def show(self, view: View) -> None:
        """Switch to another view."""
        self.view = view

    def update_draft(self, **values: str) -> BusinessDraft:
        """Set one or more draft fields.

        Raises:
            ValueError: If a name is not a draft field.
        """
        known = {f.name for f in fields(BusinessDraft)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown draft fields: {', '.join(sorted(unknown))}")
        self.draft = replace(self.draft, **values)
        return self.draft

    async def refresh(self) -> None:
        """Reload the record cache from the server.

        A failed load is logged and leaves the cache as it was.
        """
        self.loading = True
        try:
            self.businesses = await self._client.list_businesses()
        except DirectoryClientError as e:
            logger.error("directory_refresh_failed", error=str(e))
        finally:
            self.loading = False

    async def submit(self) -> Business:
        """Register the current draft.

        On success the record is cached, the draft is cleared and the
        session returns to the home view. On failure the draft is kept.

        Raises:
            DraftIncompleteError: Required draft fields are empty.
            DirectoryClientError: The server rejected the registration.
        """
        missing = self.draft.missing_fields()
        if missing:
            raise DraftIncompleteError(missing)

        self.submitting = True
        try:
            business = await self._client.register(self.draft.to_payload())
        finally:
            self.submitting = False

        self.businesses = [*self.businesses, business]
        self.draft = BusinessDraft()
        self.view = View.HOME
        return business

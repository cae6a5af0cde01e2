"""Business service for directory business logic."""

import asyncio
from datetime import UTC, datetime
from uuid import uuid4

import structlog

from src.infrastructure.observability import add_span_attributes, traced
from src.modules.businesses.exceptions import (
    InvalidCategoryError,
    MissingFieldError,
    PersistenceError,
)
from src.modules.businesses.models import Business, Category
from src.modules.businesses.protocol import RecordStore
from src.modules.businesses.schemas import BusinessCreate

logger = structlog.get_logger()

# Fields that must be present and non-empty on registration, in report order
REQUIRED_FIELDS = ("name", "description", "email", "category")


class BusinessService:
    """Service for listing and registering businesses.

    The directory is append-only: records are validated, stamped with an
    id and creation time, appended, and the whole collection is saved.
    Creates are serialized so concurrent registrations in this process
    never overwrite each other.
    """

    def __init__(self, store: RecordStore) -> None:
        """Initialize the business service.

        Args:
            store: Record store owning the persisted collection.
        """
        self._store = store
        self._write_lock = asyncio.Lock()

    @traced("businesses.list_all")
    async def list_all(self) -> list[Business]:
        """List every business in insertion order."""
        return await self._store.load_all()

    @traced("businesses.list_by_category")
    async def list_by_category(self, category: Category) -> list[Business]:
        """List businesses of one category in insertion order.

        Args:
            category: Category to keep.

        Returns:
            Matching businesses.
        """
        add_span_attributes({"business.category": category.value})
        businesses = await self._store.load_all()
        return [b for b in businesses if b.category == category]

    async def count(self) -> int:
        """Get the total number of registered businesses."""
        return len(await self._store.load_all())

    @traced("businesses.create")
    async def create(self, data: BusinessCreate) -> Business:
        """Validate and register a new business.

        Steps:
        1. Check required fields are present and non-empty
        2. Check the category is product or service
        3. Load the collection and pick an unused id
        4. Stamp the creation time and default optional fields
        5. Append and save the full collection

        Args:
            data: Registration input.

        Returns:
            The created Business, including its id and creation time.

        Raises:
            MissingFieldError: A required field is absent or empty.
            InvalidCategoryError: Category is not product or service.
            PersistenceError: The collection could not be saved.
        """
        missing = [name for name in REQUIRED_FIELDS if not getattr(data, name)]
        if missing:
            logger.info("business_rejected", reason="missing_fields", fields=missing)
            raise MissingFieldError(missing)

        try:
            category = Category(str(data.category))
        except ValueError as e:
            logger.info(
                "business_rejected",
                reason="invalid_category",
                category=data.category,
            )
            raise InvalidCategoryError(data.category) from e

        async with self._write_lock:
            businesses = await self._store.load_all()
            existing_ids = {b.id for b in businesses}

            business_id = uuid4().hex
            while business_id in existing_ids:
                business_id = uuid4().hex

            business = Business(
                id=business_id,
                name=str(data.name),
                description=str(data.description),
                email=str(data.email),
                phone=data.phone or "",
                address=data.address or "",
                category=category,
                created_at=datetime.now(UTC).isoformat(),
            )
            businesses.append(business)

            if not await self._store.save_all(businesses):
                logger.error(
                    "business_create_failed",
                    business_id=business_id,
                    name=business.name,
                )
                raise PersistenceError()

        add_span_attributes(
            {"business.id": business_id, "business.category": category.value}
        )
        logger.info(
            "business_created",
            business_id=business_id,
            name=business.name,
            category=category.value,
        )
        return business

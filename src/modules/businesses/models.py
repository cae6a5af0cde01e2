"""Business domain models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Category(StrEnum):
    """Kind of business a listing belongs to."""

    PRODUCT = "product"
    SERVICE = "service"


class ListingType(StrEnum):
    """Plural listing names accepted by the ``type`` query parameter."""

    PRODUCTS = "products"
    SERVICES = "services"

    @property
    def category(self) -> Category:
        """Category this listing filters on."""
        if self is ListingType.PRODUCTS:
            return Category.PRODUCT
        return Category.SERVICE


@dataclass(frozen=True)
class Business:
    """A registered business. Records are never changed once created."""

    id: str
    name: str
    description: str
    email: str
    phone: str
    address: str
    category: Category
    created_at: str  # ISO-8601, UTC

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Business":
        """Create a Business from its stored JSON object.

        Args:
            data: Dictionary in the persisted (camelCase) shape.

        Returns:
            Business instance.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If the category is not a known value.
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data["description"]),
            email=str(data["email"]),
            phone=str(data.get("phone") or ""),
            address=str(data.get("address") or ""),
            category=Category(data["category"]),
            created_at=str(data["createdAt"]),
        )

    def to_dict(self) -> dict[str, str]:
        """Serialize to the persisted and wire JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "category": self.category.value,
            "createdAt": self.created_at,
        }

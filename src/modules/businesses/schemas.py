"""Business Pydantic schemas for API validation."""

from pydantic import BaseModel, ConfigDict, Field

from src.modules.businesses.models import Business, Category


class BusinessCreate(BaseModel):
    """Request schema for registering a business.

    Every field is optional at the schema level; required-field and
    category checks belong to the service so the API can answer with
    its own error messages.
    """

    name: str | None = None
    description: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    category: str | None = None


class BusinessResponse(BaseModel):
    """Response schema for a single business."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    email: str
    phone: str
    address: str
    category: Category
    created_at: str = Field(alias="createdAt")

    @classmethod
    def from_business(cls, business: Business) -> "BusinessResponse":
        """Build a response from a domain record."""
        return cls.model_validate(business.to_dict())


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request."""

    error: str

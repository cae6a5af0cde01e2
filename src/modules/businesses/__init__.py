"""Business directory module.

Provides registration and category listings over an append-only,
file-backed collection of businesses.
"""

from src.modules.businesses.exceptions import (
    BusinessError,
    InvalidCategoryError,
    MissingFieldError,
    PersistenceError,
    UnreadableStoreError,
    UnsupportedMethodError,
)
from src.modules.businesses.models import Business, Category, ListingType
from src.modules.businesses.protocol import RecordStore
from src.modules.businesses.schemas import BusinessCreate, BusinessResponse
from src.modules.businesses.service import BusinessService
from src.modules.businesses.store import JsonFileStore

__all__ = [
    "Business",
    "BusinessCreate",
    "BusinessError",
    "BusinessResponse",
    "BusinessService",
    "Category",
    "InvalidCategoryError",
    "JsonFileStore",
    "ListingType",
    "MissingFieldError",
    "PersistenceError",
    "RecordStore",
    "UnreadableStoreError",
    "UnsupportedMethodError",
]

"""Business directory exceptions."""


class BusinessError(Exception):
    """Base exception for business directory operations."""

    pass


class MissingFieldError(BusinessError):
    """Raised when a required registration field is absent or empty."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__("Missing required fields")


class InvalidCategoryError(BusinessError):
    """Raised when the category is not one of the supported values."""

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__("Category must be product or service")


class PersistenceError(BusinessError):
    """Raised when the directory could not be written to the store."""

    def __init__(self, message: str = "Failed to save business") -> None:
        super().__init__(message)


class UnreadableStoreError(BusinessError):
    """Raised when the backing store cannot be read or parsed.

    The store handles this itself and degrades to an empty collection.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unreadable business store '{path}': {reason}")


class UnsupportedMethodError(BusinessError):
    """Raised for a method, path or listing type the directory does not serve."""

    def __init__(self, message: str = "Method not allowed") -> None:
        super().__init__(message)

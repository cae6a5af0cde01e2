"""Directory client exceptions."""


class DirectoryClientError(Exception):
    """Raised when the directory API answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DraftIncompleteError(DirectoryClientError):
    """Raised when a registration draft is missing required fields."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__("Please fill in all required fields")

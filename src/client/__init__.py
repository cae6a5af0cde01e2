"""Client for the business directory API.

Provides an HTTP client and a headless session that mirrors the state a
directory front end keeps (current view, form draft, record cache).
"""

from src.client.exceptions import DirectoryClientError, DraftIncompleteError
from src.client.http import DirectoryClient
from src.client.session import BusinessDraft, DirectorySession, View

__all__ = [
    "BusinessDraft",
    "DirectoryClient",
    "DirectoryClientError",
    "DirectorySession",
    "DraftIncompleteError",
    "View",
]

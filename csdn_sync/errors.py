"""Error taxonomy for the sync pipeline.

Feed-stage errors (``NetworkError`` while fetching the feed, ``FormatError``)
abort the run. Article-stage errors (``NetworkError``, ``ContentNotFoundError``)
are caught per item and degrade that item only.
"""

from __future__ import annotations


class SyncError(Exception):
    """Base class for all sync pipeline errors."""


class NetworkError(SyncError):
    """Raised when an HTTP request fails at the transport or status level."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class FormatError(SyncError):
    """Raised when a feed or the persisted index does not have the expected shape."""


class ContentNotFoundError(SyncError):
    """Raised when no candidate content container matches on an article page."""

    def __init__(self, url: str) -> None:
        super().__init__(f"No article content container found on {url}")
        self.url = url

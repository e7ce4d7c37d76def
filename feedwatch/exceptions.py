"""Exception taxonomy for the ingestion pipeline."""

from typing import Optional


class FeedwatchError(Exception):
    """Base class for all feedwatch errors."""


class FetchError(FeedwatchError):
    """Raised when a feed URL cannot be fetched (network, timeout, bad status)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {message}")


class ParseError(FeedwatchError):
    """Raised when fetched bytes are not a well-formed feed document."""


class PersistenceError(FeedwatchError):
    """Raised on genuine store failures. Never raised for duplicates."""


class RegistryError(FeedwatchError):
    """Raised when the feed registry cannot be read or written."""

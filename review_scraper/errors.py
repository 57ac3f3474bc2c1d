"""Error taxonomy for the review scraper."""
from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper failures."""


class NavigationError(ScraperError):
    """Browser or network failure while driving the page."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        message = super().__str__()
        if self.url:
            return f"{message} ({self.url})"
        return message


class ExtractionError(ScraperError):
    """Expected DOM structure is absent or cannot be parsed."""


class CorruptSessionError(ScraperError):
    """Persisted cookies are not well-formed."""


class PersistenceError(ScraperError):
    """A file could not be written."""


class ExportError(ScraperError):
    """Tabular encoding of the dataset failed."""

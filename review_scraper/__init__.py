"""Review scraper: paginated review extraction through a cookie-seeded browser session."""

__version__ = "0.1.0"

"""Domain models."""
from .models import (
    Cookie,
    ExtractionReport,
    PageFailure,
    PaginationPlan,
    ReviewPageRecord,
    Session,
    SizeMismatch,
    ITEMS_PER_PAGE,
)

__all__ = [
    "Cookie",
    "ExtractionReport",
    "PageFailure",
    "PaginationPlan",
    "ReviewPageRecord",
    "Session",
    "SizeMismatch",
    "ITEMS_PER_PAGE",
]

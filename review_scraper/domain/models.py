"""Domain models for the review scraper."""
from dataclasses import dataclass, field
from typing import Any, Optional

# Reviews shown per page by the target site template
ITEMS_PER_PAGE = 5

Cookie = dict[str, Any]
Session = list[Cookie]


@dataclass(frozen=True)
class PaginationPlan:
    """Page URLs synthesized from the review counter and one pagination link."""
    total_item_count: int
    page_count: int
    url_template: Optional[str]
    urls: tuple[str, ...] = ()
    items_per_page: int = ITEMS_PER_PAGE

    def to_checkpoint(self) -> dict:
        """Serializable checkpoint body."""
        return {
            "count": self.page_count * self.items_per_page,
            "pageCount": self.page_count,
            "urls": list(self.urls),
        }

    def visit_order(self, target_url: str) -> list[str]:
        """Target page first, then synthesized pages by increasing offset."""
        return [target_url, *self.urls]


@dataclass
class ReviewPageRecord:
    """Titles and contents scraped from one review page."""
    titles: list[str] = field(default_factory=list)
    content: list[str] = field(default_factory=list)

    @property
    def is_aligned(self) -> bool:
        return len(self.titles) == len(self.content)


@dataclass
class PageFailure:
    """A page that could not be scraped."""
    url: str
    error: Exception

    @property
    def message(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class SizeMismatch:
    """Page where the number of titles differs from the number of contents."""
    url: str
    titles: int
    content: int


@dataclass
class ExtractionReport:
    """Outcome of walking every page of the plan."""
    records: list[ReviewPageRecord] = field(default_factory=list)
    failures: list[PageFailure] = field(default_factory=list)
    mismatches: list[SizeMismatch] = field(default_factory=list)
    visited: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures

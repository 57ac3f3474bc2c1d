"""Pagination discovery for review pages.

The target page shows a review counter and numbered pagination links.
Review pages differ only by an offset token embedded in the path
(``-or5``, ``-or10``, ...), so every page URL can be synthesized from a
single observed link once the total count is known.
"""
import logging
import re
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..domain import ITEMS_PER_PAGE, PaginationPlan
from ..errors import ExtractionError, PersistenceError
from ..fs import atomic_write_json
from ..parser.dom import make_soup, node_text

# Language filter radios; the second one holds the review count, e.g. "English (1,234)"
COUNTER_SELECTOR = ".ui_radio.dQNlC"
COUNTER_INDEX = 1

# Pagination entries by class only: the current page is a span, later pages are links
PAGE_LINK_SELECTOR = ".pageNum"
PAGE_LINK_INDEX = 1

OFFSET_TOKEN = re.compile(r"-or[0-9]*")

_PARENTHESIZED = re.compile(r"\(([^)]*)\)")
_SEPARATORS = re.compile(r"[,.'\s]")
_DIGITS = re.compile(r"[0-9]+")


class PaginationDiscoverer:
    """
    Derives the list of review page URLs for a target page.
    
    Offsets grow by ``items_per_page``: the first synthesized URL carries
    offset 5, the next 10, and so on. The offset-0 page is the target URL
    itself and is not part of the plan's ``urls``.
    """
    
    def __init__(
        self,
        checkpoint_path: str | Path = "reviewUrl.json",
        settle_ms: int = 5000,
        items_per_page: int = ITEMS_PER_PAGE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize discoverer.
        
        Args:
            checkpoint_path: Where the plan is written after discovery
            settle_ms: Fixed delay before reading the page
            items_per_page: Reviews per page on the target site
            logger: Logger instance
        """
        self.checkpoint_path = Path(checkpoint_path)
        self.settle_ms = settle_ms
        self.items_per_page = items_per_page
        self.logger = logger or logging.getLogger("review_scraper")
    
    @staticmethod
    def parse_review_count(text: str) -> int:
        """
        Parse a review counter label.
        
        Args:
            text: Counter text such as "English (1,234)" or "1 234"
            
        Returns:
            Review count
            
        Raises:
            ExtractionError: If no number can be read
        """
        match = _PARENTHESIZED.search(text)
        candidate = match.group(1) if match else text
        candidate = _SEPARATORS.sub("", candidate)
        
        if not _DIGITS.fullmatch(candidate):
            raise ExtractionError(f"Review counter is not numeric: {text!r}")
        
        return int(candidate)
    
    @classmethod
    def find_total_count(cls, soup: BeautifulSoup) -> int:
        """
        Read the review count from the counter element.
        
        Raises:
            ExtractionError: If the counter is absent or unparsable
        """
        counters = soup.select(COUNTER_SELECTOR)
        if len(counters) <= COUNTER_INDEX:
            raise ExtractionError(
                f"Review counter {COUNTER_SELECTOR!r} not found "
                f"({len(counters)} matching elements)"
            )
        return cls.parse_review_count(node_text(counters[COUNTER_INDEX]))
    
    @staticmethod
    def find_url_template(soup: BeautifulSoup, base_url: str) -> Optional[str]:
        """
        Absolute href of the second pagination entry, or None.
        
        The entry is matched by class whatever its tag, so None also covers
        an entry that carries no href.
        
        Args:
            soup: Parsed page
            base_url: URL of the page, for resolving relative hrefs
        """
        links = soup.select(PAGE_LINK_SELECTOR)
        if len(links) <= PAGE_LINK_INDEX:
            return None
        
        href = (links[PAGE_LINK_INDEX].get("href") or "").strip()
        if not href:
            return None
        
        return urljoin(base_url, href)
    
    @staticmethod
    def page_count(total_item_count: int, items_per_page: int = ITEMS_PER_PAGE) -> int:
        """Number of pages beyond the first: floor(total / items_per_page)."""
        if total_item_count < 0:
            raise ValueError(f"Review count must be non-negative, got {total_item_count}")
        return total_item_count // items_per_page
    
    @staticmethod
    def build_page_urls(
        url_template: str,
        page_count: int,
        items_per_page: int = ITEMS_PER_PAGE
    ) -> list[str]:
        """
        Substitute offsets into the template for pages 1..page_count.
        
        Every offset token in the template is replaced, so the result is
        the same whichever page the template was taken from.
        
        Raises:
            ExtractionError: If pages are needed and the template has no offset token
        """
        if page_count > 0 and not OFFSET_TOKEN.search(url_template):
            raise ExtractionError(f"Pagination URL has no offset token: {url_template}")
        
        return [
            OFFSET_TOKEN.sub(f"-or{counter * items_per_page}", url_template)
            for counter in range(1, page_count + 1)
        ]
    
    def plan(self, total_item_count: int, url_template: Optional[str]) -> PaginationPlan:
        """
        Build the pagination plan from the counter value and sample link.
        
        Raises:
            ExtractionError: If pages are needed but no usable template exists
        """
        page_count = self.page_count(total_item_count, self.items_per_page)
        
        if page_count > 0 and not url_template:
            if total_item_count == page_count * self.items_per_page:
                # An exact multiple still counts one offset page past the last full one
                raise ExtractionError(
                    f"{total_item_count} reviews is an exact multiple of "
                    f"{self.items_per_page}: the page count rule asks for {page_count} "
                    f"extra pages, but the listing shows no pagination link "
                    f"{PAGE_LINK_SELECTOR!r} to build them from"
                )
            raise ExtractionError(
                f"{total_item_count} reviews need {page_count} extra pages "
                f"but no pagination link {PAGE_LINK_SELECTOR!r} was found"
            )
        
        urls = self.build_page_urls(url_template, page_count, self.items_per_page) if page_count else []
        
        return PaginationPlan(
            total_item_count=total_item_count,
            page_count=page_count,
            url_template=url_template,
            urls=tuple(urls),
            items_per_page=self.items_per_page
        )
    
    def plan_from_html(self, html: str, page_url: str) -> PaginationPlan:
        """Build the plan from a rendered page snapshot."""
        soup = make_soup(html)
        total = self.find_total_count(soup)
        template = self.find_url_template(soup, page_url)
        return self.plan(total, template)
    
    def write_checkpoint(self, plan: PaginationPlan) -> None:
        """
        Persist the plan as an audit record.
        
        Raises:
            PersistenceError: If the file cannot be written
        """
        try:
            atomic_write_json(self.checkpoint_path, plan.to_checkpoint())
        except OSError as e:
            raise PersistenceError(f"Cannot write checkpoint {self.checkpoint_path}: {e}") from e
        
        self.logger.info(f"Pagination checkpoint written to {self.checkpoint_path}")
    
    def discover(self, navigator, target_url: str) -> PaginationPlan:
        """
        Navigate to the target page and derive its pagination plan.
        
        Cookies must already be applied to the navigator.
        
        Args:
            navigator: PageNavigator with an applied session
            target_url: First review page
            
        Returns:
            PaginationPlan with one URL per additional page
        """
        navigator.goto(target_url)
        navigator.wait_until_ready()
        navigator.wait_fixed(self.settle_ms)
        
        current_url = navigator.current_url()
        self.logger.info(f"Gathering info: {current_url}")
        
        plan = self.plan_from_html(navigator.page_html(), current_url)
        
        self.logger.info(
            f"Found {plan.total_item_count} reviews: "
            f"{plan.page_count} additional pages of {plan.items_per_page}"
        )
        
        self.write_checkpoint(plan)
        return plan

"""Review extraction from rendered review pages."""
import logging
from typing import Optional

from bs4 import BeautifulSoup

from ..domain import ExtractionReport, PageFailure, ReviewPageRecord, SizeMismatch
from ..errors import ExtractionError, NavigationError
from .dom import first_child_element, make_soup, node_text

# Review title blocks; the title text sits in the first child (a link)
TITLE_BLOCK_CLASS = "fCitC"

# Review bodies are quoted; the text sits in the first child (a span)
CONTENT_BLOCK_TAG = "q"


class ReviewExtractor:
    """Extract review titles and contents page by page."""
    
    def __init__(self, settle_ms: int = 1000, logger: Optional[logging.Logger] = None):
        """
        Initialize extractor.
        
        Args:
            settle_ms: Fixed delay after each navigation before reading the DOM
            logger: Logger instance
        """
        self.settle_ms = settle_ms
        self.logger = logger or logging.getLogger("review_scraper")
    
    @staticmethod
    def _child_texts(blocks) -> list[str]:
        texts = []
        for block in blocks:
            child = first_child_element(block)
            if child is None:
                continue
            texts.append(node_text(child))
        return texts
    
    @classmethod
    def extract_titles(cls, soup: BeautifulSoup) -> list[str]:
        """Titles of all reviews on the page, in document order."""
        return cls._child_texts(soup.find_all(class_=TITLE_BLOCK_CLASS))
    
    @classmethod
    def extract_contents(cls, soup: BeautifulSoup) -> list[str]:
        """Bodies of all reviews on the page, in document order."""
        return cls._child_texts(soup.find_all(CONTENT_BLOCK_TAG))
    
    def extract_record(self, html: str) -> ReviewPageRecord:
        """
        Extract one page record from a DOM snapshot.
        
        A page without reviews gives a record with two empty lists.
        """
        soup = make_soup(html)
        return ReviewPageRecord(
            titles=self.extract_titles(soup),
            content=self.extract_contents(soup)
        )
    
    def scrape_page(self, navigator, url: str, pages_left: int) -> ReviewPageRecord:
        """
        Navigate to a review page and extract its record.
        
        Raises:
            NavigationError: If the page cannot be loaded
        """
        navigator.goto(url)
        navigator.wait_until_ready()
        navigator.wait_fixed(self.settle_ms)
        
        current_url = navigator.current_url()
        self.logger.info(f"Scraping: {current_url} | {pages_left} pages left")
        
        return self.extract_record(navigator.page_html())
    
    def scrape_all(self, navigator, urls: list[str]) -> ExtractionReport:
        """
        Visit every URL in order and collect page records.
        
        A page that fails is recorded in the report and the walk goes on
        with the next one, so completed pages are never lost.
        
        Args:
            navigator: PageNavigator with an applied session
            urls: Pages to visit, in order
            
        Returns:
            ExtractionReport with records in visitation order
        """
        report = ExtractionReport()
        
        for index, url in enumerate(urls):
            report.visited += 1
            try:
                record = self.scrape_page(navigator, url, len(urls) - index)
            except (NavigationError, ExtractionError) as e:
                self.logger.error(f"Failed to scrape {url}: {e}")
                report.failures.append(PageFailure(url=url, error=e))
                continue
            
            if not record.is_aligned:
                self.logger.warning(
                    f"{url}: {len(record.titles)} titles but "
                    f"{len(record.content)} contents"
                )
                report.mismatches.append(
                    SizeMismatch(url=url, titles=len(record.titles), content=len(record.content))
                )
            
            self.logger.debug(f"{url}: {len(record.titles)} reviews")
            report.records.append(record)
        
        return report

"""Main orchestrator for coordinating all components."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..browser import PageNavigator, PaginationDiscoverer
from ..domain import ExtractionReport, PaginationPlan
from ..exporter import ReviewExporter
from ..parser import ReviewExtractor
from ..session import SessionStore
from .bootstrap import BootstrapGate, RunState


@dataclass
class RunResult:
    """What a single run produced."""
    state: RunState
    plan: Optional[PaginationPlan] = None
    report: Optional[ExtractionReport] = None
    output_path: Optional[Path] = None
    
    @property
    def partial(self) -> bool:
        return self.report is not None and not self.report.ok


class Orchestrator:
    """Coordinates bootstrap, pagination discovery, extraction and export."""
    
    def __init__(
        self,
        session_store: SessionStore,
        discoverer: PaginationDiscoverer,
        extractor: ReviewExtractor,
        exporter: ReviewExporter,
        logger: Optional[logging.Logger] = None
    ):
        self.logger = logger or logging.getLogger("review_scraper")
        self.gate = BootstrapGate(session_store, logger=self.logger)
        self.discoverer = discoverer
        self.extractor = extractor
        self.exporter = exporter
    
    @classmethod
    def from_config(cls, config, logger: Optional[logging.Logger] = None) -> "Orchestrator":
        """
        Build an orchestrator from a Config class.
        
        Args:
            config: Config class (or object with the same attributes)
            logger: Logger instance
        """
        return cls(
            session_store=SessionStore(config.COOKIES_PATH, logger=logger),
            discoverer=PaginationDiscoverer(
                checkpoint_path=config.CHECKPOINT_PATH,
                settle_ms=config.DISCOVERY_SETTLE_MS,
                logger=logger
            ),
            extractor=ReviewExtractor(settle_ms=config.PAGE_SETTLE_MS, logger=logger),
            exporter=ReviewExporter(
                output_path=config.get_output_path(),
                output_format=config.OUTPUT_FORMAT,
                logger=logger
            ),
            logger=logger
        )
    
    @staticmethod
    def make_navigator(config, logger: Optional[logging.Logger] = None) -> PageNavigator:
        """Chrome navigator configured from a Config class."""
        return PageNavigator(
            headless=config.get_chrome_headless(),
            viewport=(config.VIEWPORT_WIDTH, config.VIEWPORT_HEIGHT),
            profile_path=config.get_chrome_profile(),
            chrome_binary=config.get_chrome_binary(),
            ready_timeout=config.READY_TIMEOUT,
            logger=logger
        )
    
    def run(self, target_url: str, navigator) -> RunResult:
        """
        Scrape every review page of target_url.
        
        On a first run only the session is saved and nothing is scraped.
        
        Args:
            target_url: First review page
            navigator: PageNavigator owned by this run; closed on return
            
        Returns:
            RunResult describing what was done
        """
        self.logger.info("=" * 60)
        self.logger.info(f"Target: {target_url}")
        self.logger.info("=" * 60)
        
        try:
            state = self.gate.enter(navigator, target_url)
            if state is RunState.FIRST_RUN:
                return RunResult(state=state)
            
            plan = self.discoverer.discover(navigator, target_url)
            report = self.extractor.scrape_all(navigator, plan.visit_order(target_url))
        finally:
            navigator.close()
        
        output_path = self.exporter.export(report.records)
        
        self.logger.info("=" * 60)
        self.logger.info(
            f"Scraping complete: {len(report.records)}/{report.visited} pages, "
            f"{len(report.failures)} failed, {len(report.mismatches)} with mismatched counts"
        )
        for failure in report.failures:
            self.logger.warning(f"Failed page {failure.url}: {failure.message}")
        self.logger.info("=" * 60)
        
        return RunResult(state=state, plan=plan, report=report, output_path=output_path)

"""First-run cookie bootstrap versus returning-run session restore."""
import logging
from enum import Enum
from typing import Optional

from ..session import SessionStore


class RunState(str, Enum):
    """Which branch a run takes."""
    FIRST_RUN = "first_run"
    RETURNING = "returning"


class BootstrapGate:
    """
    Decides once per process whether a saved session exists.
    
    A first run only opens the target page, saves the cookies the site
    sets and stops. Later runs replay those cookies so the browser looks
    like a visitor that has already been through the consent flow.
    """
    
    def __init__(self, session_store: SessionStore, logger: Optional[logging.Logger] = None):
        self.session_store = session_store
        self.logger = logger or logging.getLogger("review_scraper")
        self._state: Optional[RunState] = None
    
    @property
    def state(self) -> RunState:
        if self._state is None:
            self._state = RunState.RETURNING if self.session_store.exists() else RunState.FIRST_RUN
        return self._state
    
    def bootstrap(self, navigator, target_url: str) -> None:
        """Open the target page once and persist its cookies, then close the browser."""
        self.logger.info(f"No saved session at {self.session_store.path}, bootstrapping")
        try:
            navigator.goto(target_url)
            navigator.wait_until_ready()
            cookies = navigator.capture_cookies()
            self.session_store.save(cookies)
        finally:
            navigator.close()
        self.logger.info("Session saved; run again to scrape reviews")
    
    def restore(self, navigator) -> None:
        """Load the saved session into the browser."""
        cookies = self.session_store.load()
        navigator.apply_cookies(cookies)
    
    def enter(self, navigator, target_url: str) -> RunState:
        """
        Run the branch for the current state.
        
        Returns:
            FIRST_RUN if the pipeline must stop here, RETURNING otherwise
        """
        state = self.state
        if state is RunState.FIRST_RUN:
            self.bootstrap(navigator, target_url)
        else:
            self.restore(navigator)
        return state

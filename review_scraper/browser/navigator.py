"""Chrome page navigator built on undetected-chromedriver.

Owns the single browser window of a run and exposes the handful of
operations the pipeline needs: navigation, cookie transfer, fixed and
readiness waits, script evaluation and DOM snapshots.
"""
import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from ..domain import Cookie, Session
from ..errors import NavigationError

# CDP Network.setCookie parameters that map one-to-one from WebDriver cookies
_CDP_COOKIE_FIELDS = ("name", "value", "domain", "path", "secure", "httpOnly", "sameSite")

READY_STATE_SCRIPT = "return document.readyState"


def to_cdp_cookie(cookie: Cookie) -> dict:
    """
    Convert a WebDriver cookie dict to ``Network.setCookie`` parameters.
    
    ``expiry`` becomes ``expires``; keys CDP does not know are dropped.
    """
    params = {key: cookie[key] for key in _CDP_COOKIE_FIELDS if key in cookie}
    if "expiry" in cookie:
        params["expires"] = cookie["expiry"]
    return params


class PageNavigator:
    """
    Chrome-based page driver using undetected-chromedriver.
    
    Features:
    - Uses existing Chrome installation
    - Optional custom Chrome profile
    - Cookies applied through DevTools, before the first navigation
    - Fixed settle delays plus a bounded document-ready wait
    """
    
    def __init__(
        self,
        headless: bool = True,
        viewport: tuple[int, int] = (1920, 1080),
        profile_path: Optional[str] = None,
        chrome_binary: Optional[str] = None,
        ready_timeout: int = 30,
        logger: Optional[logging.Logger] = None,
        driver=None
    ):
        """
        Initialize navigator.
        
        Args:
            headless: Run in headless mode
            viewport: Window width and height
            profile_path: Path to Chrome user profile directory
            chrome_binary: Path to Chrome binary (auto-detected if None)
            ready_timeout: Seconds to wait for document.readyState == "complete"
            logger: Logger instance
            driver: Already constructed WebDriver to use instead of launching Chrome
        """
        self.headless = headless
        self.viewport = viewport
        self.profile_path = profile_path
        self.chrome_binary = chrome_binary
        self.ready_timeout = ready_timeout
        self.logger = logger or logging.getLogger("review_scraper")
        self.driver = driver
        self.last_url: Optional[str] = None

    @contextmanager
    def _driver_errors(self, action: str, url: Optional[str] = None) -> Iterator[None]:
        try:
            yield
        except WebDriverException as e:
            raise NavigationError(f"{action} failed: {e.msg or e}", url=url) from e
    
    def _launch(self):
        import undetected_chromedriver as uc
        
        options = uc.ChromeOptions()
        
        if self.profile_path:
            profile_path = Path(self.profile_path).resolve()
            if profile_path.exists():
                options.add_argument(f"--user-data-dir={profile_path}")
                self.logger.info(f"Using Chrome profile: {profile_path}")
            else:
                self.logger.warning(f"Profile path not found: {profile_path}")
        
        if self.headless:
            options.add_argument("--headless=new")
            self.logger.info("Running in headless mode")
        
        width, height = self.viewport
        options.add_argument(f"--window-size={width},{height}")
        options.add_argument("--disable-blink-features=AutomationControlled")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--no-sandbox")
        
        driver_kwargs = {"options": options}
        if self.chrome_binary:
            driver_kwargs["browser_executable_path"] = self.chrome_binary
        
        return uc.Chrome(**driver_kwargs)
    
    def open(self):
        """
        Launch Chrome unless a driver is already attached.
        
        Returns:
            The WebDriver handle
            
        Raises:
            NavigationError: If Chrome cannot be started
        """
        if self.driver is not None:
            return self.driver
        
        self.logger.info("Initializing Chrome WebDriver...")
        with self._driver_errors("Chrome startup"):
            self.driver = self._launch()
        self.logger.info("Chrome WebDriver initialized successfully")
        return self.driver
    
    def goto(self, url: str) -> None:
        """Navigate to url."""
        driver = self.open()
        self.logger.debug(f"Navigating to {url}")
        self.last_url = url
        with self._driver_errors("Navigation", url):
            driver.get(url)
    
    def current_url(self) -> str:
        with self._driver_errors("Reading current URL"):
            return self.open().current_url
    
    def apply_cookies(self, cookies: Session) -> None:
        """
        Install cookies into the browser through DevTools.
        
        Works before any page of the cookie's domain has been opened.
        """
        driver = self.open()
        with self._driver_errors("Setting cookies"):
            driver.execute_cdp_cmd("Network.enable", {})
            for cookie in cookies:
                driver.execute_cdp_cmd("Network.setCookie", to_cdp_cookie(cookie))
        self.logger.info(f"Applied {len(cookies)} cookies")
    
    def capture_cookies(self) -> Session:
        """Cookies visible to the current page."""
        with self._driver_errors("Reading cookies"):
            return list(self.open().get_cookies())
    
    def wait_fixed(self, duration_ms: int) -> None:
        """Sleep for a fixed render-settle delay."""
        if duration_ms > 0:
            time.sleep(duration_ms / 1000)
    
    def wait_until_ready(self, timeout: Optional[int] = None) -> None:
        """
        Block until the document reports readyState "complete".
        
        Raises:
            NavigationError: If the page is not ready within the timeout
        """
        driver = self.open()
        timeout = timeout or self.ready_timeout
        try:
            WebDriverWait(driver, timeout).until(
                lambda _: self.evaluate(READY_STATE_SCRIPT) == "complete"
            )
        except TimeoutException as e:
            raise NavigationError(f"Page not ready after {timeout}s", url=self.last_url) from e
    
    def evaluate(self, script: str, *args) -> Any:
        """Run JavaScript in the page and return its result."""
        with self._driver_errors("Script evaluation"):
            return self.open().execute_script(script, *args)
    
    def page_html(self) -> str:
        """Snapshot of the rendered DOM."""
        with self._driver_errors("Reading page source"):
            return self.open().page_source
    
    def close(self) -> None:
        """Close browser and clean up resources."""
        if self.driver:
            try:
                self.logger.info("Closing Chrome WebDriver...")
                self.driver.quit()
                self.logger.info("Chrome WebDriver closed")
            except WebDriverException as e:
                self.logger.warning(f"Error closing Chrome WebDriver: {e}")
            finally:
                self.driver = None
    
    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

"""Persist browser cookies between runs."""
import json
import logging
from pathlib import Path
from typing import Optional

from ..domain import Session
from ..errors import CorruptSessionError, PersistenceError
from ..fs import atomic_write_json, file_exists


class SessionStore:
    """
    JSON file holding the cookie list captured from the browser.
    
    The file is a single-writer resource: concurrent runs sharing one
    cookie file are not coordinated.
    """
    
    def __init__(self, path: str | Path = "cookies.json", logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger or logging.getLogger("review_scraper")
    
    def exists(self) -> bool:
        """Whether a persisted session is available. Never raises."""
        return file_exists(self.path)
    
    def load(self) -> Session:
        """
        Read the persisted cookies.
        
        Returns:
            List of cookie dicts, in the order they were saved
            
        Raises:
            CorruptSessionError: If the file is unreadable or not a list of cookie objects
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
            cookies = json.loads(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptSessionError(f"Cannot read session from {self.path}: {e}") from e
        
        if not isinstance(cookies, list):
            raise CorruptSessionError(f"Session file {self.path} must hold a list of cookies")
        
        for index, cookie in enumerate(cookies):
            if not isinstance(cookie, dict) or "name" not in cookie or "value" not in cookie:
                raise CorruptSessionError(
                    f"Cookie #{index} in {self.path} is missing a name or value"
                )
        
        self.logger.info(f"Loaded {len(cookies)} cookies from {self.path}")
        return cookies
    
    def save(self, cookies: Session) -> None:
        """
        Persist cookies, replacing any previous session.
        
        Raises:
            PersistenceError: If the file cannot be written
        """
        try:
            atomic_write_json(self.path, list(cookies))
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot write session to {self.path}: {e}") from e
        
        self.logger.info(f"Saved {len(cookies)} cookies to {self.path}")

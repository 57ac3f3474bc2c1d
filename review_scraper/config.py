"""Configuration management."""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

OUTPUT_FORMATS = ("csv", "json")


class Config:
    """Application configuration from environment variables."""
    
    # Persisted artifacts
    COOKIES_PATH: str = os.getenv("COOKIES_PATH", "cookies.json")
    CHECKPOINT_PATH: str = os.getenv("CHECKPOINT_PATH", "reviewUrl.json")
    OUTPUT_FORMAT: str = os.getenv("OUTPUT_FORMAT", "csv").lower()
    # Empty means review.<OUTPUT_FORMAT>
    OUTPUT_PATH: str = os.getenv("OUTPUT_PATH", "")
    
    # Render settle delays (milliseconds) and readiness timeout (seconds)
    DISCOVERY_SETTLE_MS: int = int(os.getenv("DISCOVERY_SETTLE_MS", "5000"))
    PAGE_SETTLE_MS: int = int(os.getenv("PAGE_SETTLE_MS", "1000"))
    READY_TIMEOUT: int = int(os.getenv("READY_TIMEOUT", "30"))
    
    # Logging
    LOGS_DIR: str = os.getenv("LOGS_DIR", "logs")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_MAX_BYTES: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))  # 10 MB
    LOG_BACKUP_COUNT: int = int(os.getenv("LOG_BACKUP_COUNT", "10"))
    
    # Chrome/Browser settings
    CHROME_PROFILE_PATH: str = os.getenv("CHROME_PROFILE_PATH", "")
    CHROME_HEADLESS: str = os.getenv("CHROME_HEADLESS", "true")
    CHROME_BINARY_PATH: str = os.getenv("CHROME_BINARY_PATH", "")
    VIEWPORT_WIDTH: int = int(os.getenv("VIEWPORT_WIDTH", "1920"))
    VIEWPORT_HEIGHT: int = int(os.getenv("VIEWPORT_HEIGHT", "1080"))
    
    @classmethod
    def get_log_level(cls) -> int:
        """
        Get logging level as integer.
        
        Returns:
            Logging level constant
        """
        return getattr(logging, cls.LOG_LEVEL.upper(), logging.INFO)
    
    @classmethod
    def get_output_path(cls) -> str:
        """
        Output file path.

        Returns:
            OUTPUT_PATH if set, otherwise review.<OUTPUT_FORMAT>
        """
        return cls.OUTPUT_PATH or f"review.{cls.OUTPUT_FORMAT}"

    @classmethod
    def get_chrome_profile(cls) -> Optional[str]:
        """Chrome profile path or None if not set."""
        return cls.CHROME_PROFILE_PATH or None
    
    @classmethod
    def get_chrome_binary(cls) -> Optional[str]:
        """Chrome binary path or None to auto-detect."""
        return cls.CHROME_BINARY_PATH or None
    
    @classmethod
    def get_chrome_headless(cls) -> bool:
        """
        Get Chrome headless mode setting.
        
        Returns:
            True if headless mode enabled, False otherwise
        """
        return cls.CHROME_HEADLESS.lower() in ("true", "1", "yes")
    
    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.
        
        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        
        if cls.OUTPUT_FORMAT not in OUTPUT_FORMATS:
            errors.append(f"OUTPUT_FORMAT must be one of: {', '.join(OUTPUT_FORMATS)}")
        
        if cls.DISCOVERY_SETTLE_MS < 0:
            errors.append("DISCOVERY_SETTLE_MS must be >= 0")
        
        if cls.PAGE_SETTLE_MS < 0:
            errors.append("PAGE_SETTLE_MS must be >= 0")
        
        if cls.READY_TIMEOUT < 1:
            errors.append("READY_TIMEOUT must be >= 1")
        
        if cls.VIEWPORT_WIDTH < 1 or cls.VIEWPORT_HEIGHT < 1:
            errors.append("VIEWPORT_WIDTH and VIEWPORT_HEIGHT must be >= 1")
        
        return errors
    
    @classmethod
    def display(cls) -> None:
        """Display current configuration."""
        print("=== Configuration ===")
        print(f"COOKIES_PATH: {cls.COOKIES_PATH}")
        print(f"CHECKPOINT_PATH: {cls.CHECKPOINT_PATH}")
        print(f"OUTPUT_PATH: {cls.get_output_path()}")
        print(f"OUTPUT_FORMAT: {cls.OUTPUT_FORMAT}")
        print(f"DISCOVERY_SETTLE_MS: {cls.DISCOVERY_SETTLE_MS}")
        print(f"PAGE_SETTLE_MS: {cls.PAGE_SETTLE_MS}")
        print(f"READY_TIMEOUT: {cls.READY_TIMEOUT}s")
        print(f"LOGS_DIR: {cls.LOGS_DIR}")
        print(f"LOG_LEVEL: {cls.LOG_LEVEL}")
        print(f"CHROME_PROFILE: {cls.CHROME_PROFILE_PATH or 'None'}")
        print(f"CHROME_HEADLESS: {cls.get_chrome_headless()}")
        print(f"CHROME_BINARY: {cls.CHROME_BINARY_PATH or 'Auto-detect'}")
        print(f"VIEWPORT: {cls.VIEWPORT_WIDTH}x{cls.VIEWPORT_HEIGHT}")
        print("=" * 30)

"""Logger configuration with console output and rotating log files."""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ..fs import ensure_directory

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "review_scraper",
    log_dir: str | Path = "logs",
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 10
) -> logging.Logger:
    """
    Configure and return a named logger.
    
    Calling this twice for the same name does not duplicate handlers.
    
    Args:
        name: Logger name, also used for the log file name
        log_dir: Directory for log files
        level: Logging level
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    if logger.handlers:
        return logger
    
    formatter = logging.Formatter(LOG_FORMAT)
    
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)
    
    log_path = ensure_directory(log_dir) / f"{name}.log"
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    
    logger.propagate = False
    return logger

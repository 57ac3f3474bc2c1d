"""
Review Scraper - paginated review extraction

Usage:
    python main.py <url>

The first run against a fresh checkout only opens <url> and saves the
site's cookies to COOKIES_PATH. Every later run reuses those cookies,
discovers all review pages, scrapes them and writes OUTPUT_PATH.

Exit status:
    0  success (or session bootstrap completed)
    1  fatal error or bad usage
    2  output written but some pages failed
"""
import sys

from review_scraper.app import Orchestrator
from review_scraper.config import Config
from review_scraper.errors import ScraperError
from review_scraper.log import setup_logger

USAGE = "Usage: python main.py <url>"


def run(target_url: str, logger) -> int:
    """Run the pipeline for one target page and return the exit status."""
    orchestrator = Orchestrator.from_config(Config, logger=logger)
    navigator = Orchestrator.make_navigator(Config, logger=logger)
    
    result = orchestrator.run(target_url, navigator)
    
    if result.partial:
        logger.warning(
            f"{len(result.report.failures)} pages failed; partial output in {result.output_path}"
        )
        return 2
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    
    if not args or not args[0].strip():
        print("Missing URL", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1
    
    errors = Config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 1
    
    logger = setup_logger(
        name="review_scraper",
        log_dir=Config.LOGS_DIR,
        level=Config.get_log_level(),
        max_bytes=Config.LOG_MAX_BYTES,
        backup_count=Config.LOG_BACKUP_COUNT
    )
    
    logger.info("=" * 60)
    logger.info("Review Scraper Starting")
    logger.info("=" * 60)
    
    Config.display()
    
    try:
        return run(args[0].strip(), logger)
    
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    
    except ScraperError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1
    
    finally:
        logger.info("Review Scraper finished")


if __name__ == "__main__":
    sys.exit(main())

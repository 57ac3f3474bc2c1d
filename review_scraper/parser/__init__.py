"""DOM snapshot parsing."""
from .dom import make_soup, node_text
from .extractor import ReviewExtractor

__all__ = ["make_soup", "node_text", "ReviewExtractor"]

"""Browser automation for navigating and paginating review pages."""
from .navigator import PageNavigator
from .pagination import PaginationDiscoverer

__all__ = ["PageNavigator", "PaginationDiscoverer"]

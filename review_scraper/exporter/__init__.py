"""Tabular export of scraped reviews."""
from .exporter import ReviewExporter, FIELDS

__all__ = ["ReviewExporter", "FIELDS"]

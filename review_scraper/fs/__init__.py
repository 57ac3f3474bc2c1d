"""Filesystem helpers."""
from .utils import ensure_directory, atomic_write_text, atomic_write_json, file_exists

__all__ = ["ensure_directory", "atomic_write_text", "atomic_write_json", "file_exists"]

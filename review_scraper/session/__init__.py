"""Cookie session persistence."""
from .store import SessionStore

__all__ = ["SessionStore"]

"""
In-memory library catalog.

Responsibilities:
- Own the books, the relationship graph and the recommendation engine.
- Keep catalog and graph consistent across create and delete.
- Load the starter catalog from the packaged seed CSV.
"""
from .store import LibraryStore

__all__ = ["LibraryStore"]

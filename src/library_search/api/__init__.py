"""Service layer for embedding library search in a caller."""

from .service import LibrarySearchService

__all__ = ["LibrarySearchService"]

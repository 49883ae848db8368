"""Data models for the library search system."""

from .document import Document, DocumentMetadata, DocumentModel, MetadataModel
from .query import Query, QueryModel
from .result import SearchResult

__all__ = [
    "Document",
    "DocumentMetadata",
    "DocumentModel",
    "MetadataModel",
    "Query",
    "QueryModel",
    "SearchResult",
]

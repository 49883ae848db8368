"""
Library Search

Lexical retrieval over a fixed corpus of Flux and Kubernetes API reference
documents: an inverted index ranked with BM25 plus a curated-keyword boost.
"""

from .api.service import LibrarySearchService
from .catalog import DEFAULT_CATALOG, load_corpus
from .core.engine import SearchEngine, search
from .core.index import InvertedIndex, build_index
from .models.document import Document, DocumentMetadata
from .models.query import Query
from .models.result import SearchResult

__version__ = "1.0.0"

__all__ = [
    "LibrarySearchService",
    "SearchEngine",
    "InvertedIndex",
    "build_index",
    "search",
    "DEFAULT_CATALOG",
    "load_corpus",
    "Document",
    "DocumentMetadata",
    "Query",
    "SearchResult",
]

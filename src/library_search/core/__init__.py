"""Core retrieval components: tokenizer, inverted index, BM25 and ranking."""

from .engine import KEYWORD_WEIGHT, SearchEngine, find_candidates, search
from .exceptions import (
    ConfigurationError,
    DocumentProcessingError,
    EmptyCorpusError,
    IndexBuildError,
    LibrarySearchError,
    SearchError,
    SnapshotError,
    ValidationError
)
from .index import InvertedIndex, Posting, build_index
from .snapshot import load_index, save_index
from .tokenizer import is_version, stem, tokenize, tokenize_with_counts

__all__ = [
    "KEYWORD_WEIGHT",
    "SearchEngine",
    "find_candidates",
    "search",
    "InvertedIndex",
    "Posting",
    "build_index",
    "load_index",
    "save_index",
    "is_version",
    "stem",
    "tokenize",
    "tokenize_with_counts",
    "LibrarySearchError",
    "ValidationError",
    "DocumentProcessingError",
    "IndexBuildError",
    "EmptyCorpusError",
    "SnapshotError",
    "SearchError",
    "ConfigurationError",
]

"""Custom exceptions for the library search system."""


class LibrarySearchError(Exception):
    """Base exception for library search operations."""
    pass


class ValidationError(LibrarySearchError):
    """Exception raised during input validation."""
    pass


class DocumentProcessingError(LibrarySearchError):
    """Exception raised while reading or preparing source documents."""
    pass


class IndexBuildError(LibrarySearchError):
    """Exception raised while building the inverted index."""
    pass


class EmptyCorpusError(IndexBuildError):
    """Exception raised when an index is built from zero documents."""
    pass


class SnapshotError(LibrarySearchError):
    """Exception raised while saving or loading an index snapshot."""
    pass


class SearchError(LibrarySearchError):
    """Exception raised during search operations."""
    pass


class ConfigurationError(LibrarySearchError):
    """Exception raised for configuration issues."""
    pass

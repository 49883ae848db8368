"""Utility modules for library search."""

from .formatting import format_results_markdown, generate_context_snippet
from .logging_config import StructuredLogger, setup_logging
from .validators import validate_entries, validate_query

__all__ = [
    "format_results_markdown",
    "generate_context_snippet",
    "setup_logging",
    "StructuredLogger",
    "validate_entries",
    "validate_query",
]

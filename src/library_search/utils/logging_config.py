"""Logging configuration for the library search package."""

import logging
import sys
from typing import IO, Any, Dict, Mapping, MutableMapping, Optional, Tuple

from ..core.exceptions import ConfigurationError

PACKAGE_LOGGER = "library_search"

TIMESTAMP_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _PackageHandler(logging.StreamHandler):
    """Stream handler owned by setup_logging(), replaced on reconfiguration."""


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure the library_search logger hierarchy.

    Only the package logger is touched, so an embedding application keeps
    its own root configuration. Calling again replaces the previous handler.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        include_timestamp: Whether to include timestamps
        stream: Output stream, stdout by default

    Returns:
        The configured package logger

    Raises:
        ConfigurationError: If level is not a known logging level
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level: {level}")

    if format_string is None:
        format_string = TIMESTAMP_FORMAT if include_timestamp else PLAIN_FORMAT

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, _PackageHandler):
            package_logger.removeHandler(handler)

    handler = _PackageHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(format_string))
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    package_logger.debug(f"Logging configured with level: {level.upper()}")
    return package_logger


class StructuredLogger(logging.LoggerAdapter):
    """
    Logger adapter that appends key=value context to every message.

    Example:
        >>> log = StructuredLogger(__name__).with_context(query="helm", results=3)
        >>> log.debug("Search completed")  # "Search completed [query=helm results=3]"
    """

    def __init__(self, name: str, context: Optional[Mapping[str, Any]] = None):
        super().__init__(logging.getLogger(name), dict(context or {}))

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self.extra)

    def with_context(self, **kwargs) -> 'StructuredLogger':
        """Return a new adapter with kwargs merged over the current context."""
        return StructuredLogger(self.logger.name, {**self.extra, **kwargs})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        if not self.extra:
            return msg, kwargs

        context_str = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} [{context_str}]", kwargs

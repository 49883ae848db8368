"""High-level API service for library search."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from ..core.engine import SearchEngine
from ..core.exceptions import LibrarySearchError, SearchError
from ..core.index import BuildEntry, InvertedIndex, build_index
from ..core.snapshot import load_index, save_index
from ..models.result import SearchResult
from ..utils.formatting import format_results_markdown
from ..utils.logging_config import setup_logging
from ..utils.validators import validate_query

logger = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "index.pkl"


class LibrarySearchService:
    """
    High-level service interface for library search.

    Searches are pure in-memory computation; they run on a thread pool so
    an event loop serving many callers is never blocked by ranking.
    """

    def __init__(
        self,
        index_path: Optional[Path] = None,
        max_workers: int = 4,
        log_level: str = "INFO"
    ):
        """
        Initialize library search service.

        Args:
            index_path: Directory holding the index snapshot
            max_workers: Number of worker threads for searches and builds
            log_level: Logging level
        """
        setup_logging(level=log_level)

        self.index_path = Path(index_path) if index_path else Path("./library_search_index")
        self.executor = ThreadPoolExecutor(max_workers=max_workers)
        self.engine = SearchEngine()

        self._initialized = False
        logger.info("Library search service initialized")

    @property
    def snapshot_path(self) -> Path:
        return self.index_path / SNAPSHOT_FILENAME

    async def _run(self, func, *args):
        return await asyncio.get_running_loop().run_in_executor(self.executor, func, *args)

    async def initialize(
        self,
        entries: Optional[Sequence[BuildEntry]] = None,
        load_existing: bool = True
    ) -> None:
        """
        Publish an index, from the snapshot when present, otherwise built from entries.

        Args:
            entries: Documents to index when no snapshot is loaded
            load_existing: Whether to load an existing snapshot from disk

        Raises:
            LibrarySearchError: If no index could be published
        """
        try:
            if load_existing and self.snapshot_path.exists():
                index = await self._run(load_index, self.snapshot_path)
                logger.info("Loaded existing index")
            else:
                index = await self._run(build_index, list(entries or []))

            self.engine.swap_index(index)
            self._initialized = True
            logger.info("Service initialization complete")

        except LibrarySearchError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize service: {str(e)}")
            raise LibrarySearchError(f"Service initialization failed: {str(e)}")

    async def rebuild(self, entries: Sequence[BuildEntry]) -> InvertedIndex:
        """
        Build a new index off to the side, then swap it in as a whole.

        In-flight searches keep reading the previous index.
        """
        self._check_initialized()

        index = await self._run(build_index, list(entries))
        self.engine.swap_index(index)
        return index

    async def search(self, query: Any, limit: Optional[int] = None) -> List[SearchResult]:
        """
        Search for documents matching the query.

        Args:
            query: Query text, a Query, or a mapping with text and limit
            limit: Overrides the query's limit when given

        Returns:
            List of ranked search results, empty when nothing matches

        Raises:
            LibrarySearchError: If the query is invalid or search fails
        """
        self._check_initialized()

        query = validate_query(query)
        if limit is None:
            limit = query.limit

        try:
            results = await self._run(self.engine.search, query.text, limit)
            logger.debug(f"Search returned {len(results)} results")
            return results

        except LibrarySearchError:
            raise
        except Exception as e:
            logger.error(f"Search failed: {str(e)}")
            raise SearchError(f"Search failed: {str(e)}")

    async def search_markdown(
        self,
        query: Any,
        limit: Optional[int] = None,
        include_content: bool = True
    ) -> str:
        """Search and render the results as markdown sections."""
        results = await self.search(query, limit)
        return format_results_markdown(results, include_content=include_content)

    async def save_index(self, path: Optional[Path] = None) -> None:
        """Save the published index to disk."""
        self._check_initialized()
        await self._run(save_index, self.engine.index, path or self.snapshot_path)

    async def get_stats(self) -> Dict[str, Any]:
        """Get service and engine statistics."""
        self._check_initialized()

        return {
            'service': {
                'initialized': self._initialized,
                'index_path': str(self.index_path)
            },
            'engine': self.engine.get_stats()
        }

    async def health_check(self) -> Dict[str, Any]:
        """Perform health check."""
        if not self._initialized:
            return {
                'status': 'not_initialized',
                'message': 'Service not initialized'
            }

        return self.engine.health_check()

    def _check_initialized(self) -> None:
        """Check if service is properly initialized."""
        if not self._initialized:
            raise LibrarySearchError("Service not initialized. Call initialize() first.")

    async def close(self) -> None:
        """Release worker threads."""
        self.executor.shutdown(wait=True)
        self._initialized = False
        logger.info("Service closed successfully")

    @classmethod
    @asynccontextmanager
    async def create(
        cls,
        index_path: Optional[Path] = None,
        entries: Optional[Sequence[BuildEntry]] = None,
        load_existing: bool = True,
        **kwargs
    ) -> AsyncIterator['LibrarySearchService']:
        """
        Create and manage service lifecycle with context manager.

        Args:
            index_path: Directory holding the index snapshot
            entries: Documents to index when no snapshot is loaded
            load_existing: Whether to load an existing snapshot
            **kwargs: Additional service configuration

        Yields:
            Initialized library search service
        """
        service = cls(index_path=index_path, **kwargs)

        try:
            await service.initialize(entries=entries, load_existing=load_existing)
            yield service
        finally:
            await service.close()

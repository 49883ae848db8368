"""Search orchestration: candidate generation, scoring and ranking."""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

import numpy as np

from ..models.result import SearchResult
from ..utils.logging_config import StructuredLogger
from .exceptions import SearchError
from .index import InvertedIndex
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

# A single curated keyword match outweighs ordinary content frequency variation.
KEYWORD_WEIGHT = 5.0


def find_candidates(index: InvertedIndex, query_terms: List[str]) -> Dict[int, List[str]]:
    """
    Collect every document containing at least one query term.

    Returns:
        Document position -> query terms found in its content, in the order
        documents were first reached
    """
    candidates: Dict[int, List[str]] = {}
    for term in query_terms:
        for posting in index.terms.get(term, ()):
            candidates.setdefault(posting.doc_id, []).append(term)
    return candidates


def search(index: InvertedIndex, query: str, limit: int) -> List[SearchResult]:
    """
    Rank documents for a free-text query.

    Combined score is bm25 + keyword_boost × KEYWORD_WEIGHT. Documents that
    match only through keywords, with no content term, are not retrieved.

    Args:
        index: Index to search
        query: Free-text query
        limit: Maximum number of results, <= 0 returns every candidate

    Returns:
        Results ordered by descending score; empty when the query has no
        usable terms or nothing matches
    """
    query_terms = sorted(tokenize(query))
    if not query_terms:
        return []

    candidates = find_candidates(index, query_terms)
    if not candidates:
        return []

    doc_ids = list(candidates)
    scores = np.array([
        index.score(query_terms, doc_id)
        + index.keyword_score(query_terms, doc_id) * KEYWORD_WEIGHT
        for doc_id in doc_ids
    ], dtype=float)

    # Stable sort keeps candidate order among equal scores
    order = np.argsort(-scores, kind='stable')
    if limit > 0:
        order = order[:limit]

    return [
        SearchResult(
            document=index.documents[doc_ids[i]],
            score=float(scores[i]),
            matched_terms=candidates[doc_ids[i]]
        )
        for i in order
    ]


class SearchEngine:
    """
    Search engine over a published, read-only inverted index.

    The index reference is replaced as a whole by swap_index(); postings are
    never mutated in place, so concurrent searches need no locking.
    """

    def __init__(self, index: Optional[InvertedIndex] = None):
        """
        Initialize search engine.

        Args:
            index: Prebuilt index; searches return nothing until one is set
        """
        self._index = index
        self._stats = {
            'total_searches': 0,
            'avg_search_time': 0.0
        }
        self._stats_lock = threading.Lock()
        self._log = StructuredLogger(__name__)

    @property
    def index(self) -> Optional[InvertedIndex]:
        return self._index

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    def swap_index(self, index: InvertedIndex) -> None:
        """Publish a freshly built index in place of the current one."""
        self._index = index
        logger.info(f"Index swapped: {index.total_docs} documents")

    def search(self, query: str, limit: int = 5) -> List[SearchResult]:
        """
        Search the current index.

        Raises:
            SearchError: If scoring fails unexpectedly
        """
        index = self._index
        if index is None:
            logger.debug("Search attempted before an index was published")
            return []

        start_time = time.perf_counter()
        try:
            results = search(index, query, limit)
        except Exception as e:
            logger.error(f"Search failed: {str(e)}")
            raise SearchError(f"Search failed: {str(e)}")

        search_time = time.perf_counter() - start_time
        self._update_search_stats(search_time)

        self._log.with_context(query=repr(query), limit=limit, results=len(results)).debug(
            f"Search completed in {search_time:.4f}s"
        )
        return results

    def _update_search_stats(self, search_time: float) -> None:
        """Update search performance statistics."""
        with self._stats_lock:
            self._stats['total_searches'] += 1

            # Update rolling average
            total_searches = self._stats['total_searches']
            current_avg = self._stats['avg_search_time']
            self._stats['avg_search_time'] = (
                (current_avg * (total_searches - 1) + search_time) / total_searches
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        index_stats = self._index.get_stats() if self._index else {'total_documents': 0}
        return {**self._stats, **index_stats}

    def health_check(self) -> Dict[str, Any]:
        """Report whether an index is published and searchable."""
        return {
            'status': 'healthy' if self.is_ready else 'not_ready',
            'is_ready': self.is_ready,
            'stats': self.get_stats(),
            'timestamp': time.time()
        }

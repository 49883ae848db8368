"""On-disk index snapshots for fast process startup."""

import logging
import pickle
from pathlib import Path
from typing import Any, Dict

from .exceptions import SnapshotError
from .index import InvertedIndex

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1
_REQUIRED_KEYS = ('terms', 'documents', 'total_docs', 'avg_doc_length')


def save_index(index: InvertedIndex, path: Path) -> None:
    """
    Save the index to disk.

    The payload keeps the term -> postings mapping, the documents in build
    order, total_docs and avg_doc_length, so posting positions
    survive a round trip unchanged.

    Raises:
        SnapshotError: If the snapshot cannot be written
    """
    index_data = {
        'version': SNAPSHOT_VERSION,
        'terms': index.terms,
        'documents': index.documents,
        'total_docs': index.total_docs,
        'avg_doc_length': index.avg_doc_length,
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'wb') as f:
            pickle.dump(index_data, f)
    except (OSError, pickle.PicklingError) as e:
        logger.error(f"Failed to save index: {str(e)}")
        raise SnapshotError(f"Failed to save index: {str(e)}")

    logger.info(f"Index saved to {path}")


def load_index(path: Path) -> InvertedIndex:
    """
    Load an index snapshot written by save_index().

    Raises:
        SnapshotError: If the file is missing, unreadable or of another format
    """
    try:
        with open(path, 'rb') as f:
            index_data: Dict[str, Any] = pickle.load(f)
    except (OSError, pickle.UnpicklingError, EOFError, AttributeError) as e:
        logger.error(f"Failed to load index: {str(e)}")
        raise SnapshotError(f"Failed to load index: {str(e)}")

    if not isinstance(index_data, dict) or index_data.get('version') != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot format in {path}")

    missing = [key for key in _REQUIRED_KEYS if key not in index_data]
    if missing:
        raise SnapshotError(f"Snapshot {path} is missing fields: {', '.join(missing)}")

    index = InvertedIndex(
        terms=index_data['terms'],
        documents=index_data['documents'],
        avg_doc_length=index_data['avg_doc_length'],
        total_docs=index_data['total_docs'],
    )

    logger.info(f"Index loaded from {path}: {index.total_docs} documents")
    return index

"""Inverted index construction and corpus statistics."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

from ..models.document import Document, DocumentMetadata
from . import bm25
from .exceptions import EmptyCorpusError, ValidationError
from .keywords import keyword_score
from .tokenizer import tokenize_with_counts

logger = logging.getLogger(__name__)

BuildEntry = Union[Document, Tuple[str, str, DocumentMetadata]]


@dataclass(frozen=True)
class Posting:
    """Occurrence of a term in one document."""
    doc_id: int
    frequency: int


@dataclass
class InvertedIndex:
    """
    Term -> postings mapping plus the document corpus.

    Built once by build_index() and treated as read-only afterwards; any
    number of searches may read it concurrently.

    Attributes:
        terms: Normalized term -> postings, one posting per containing document
        documents: All documents, referenced by position from postings
        avg_doc_length: Mean retained token count over all documents
        total_docs: Number of documents
    """
    terms: Dict[str, List[Posting]] = field(default_factory=dict)
    documents: List[Document] = field(default_factory=list)
    avg_doc_length: float = 0.0
    total_docs: int = 0

    def idf(self, term: str) -> float:
        return bm25.idf(self, term)

    def term_frequency(self, term: str, doc_id: int) -> int:
        return bm25.term_frequency(self, term, doc_id)

    def score(self, query_terms: Iterable[str], doc_id: int) -> float:
        return bm25.score(self, query_terms, doc_id)

    def keyword_score(self, query_terms: Iterable[str], doc_id: int) -> float:
        return keyword_score(self, query_terms, doc_id)

    def document_frequency(self, term: str) -> int:
        """Number of documents containing term."""
        return len(self.terms.get(term, ()))

    @property
    def vocabulary_size(self) -> int:
        return len(self.terms)

    def get_stats(self) -> Dict[str, Any]:
        """Get index statistics."""
        return {
            'total_documents': self.total_docs,
            'vocabulary_size': self.vocabulary_size,
            'total_postings': sum(len(p) for p in self.terms.values()),
            'avg_doc_length': self.avg_doc_length,
        }


def _normalize_entry(entry: BuildEntry) -> Tuple[str, str, DocumentMetadata]:
    if isinstance(entry, Document):
        return entry.id, entry.content, entry.metadata

    try:
        doc_id, content, metadata = entry
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid index entry: {entry!r}")

    if not isinstance(doc_id, str):
        raise ValidationError(f"Document ID must be a string, got {type(doc_id).__name__}")
    if not isinstance(metadata, DocumentMetadata):
        raise ValidationError(f"Invalid metadata for document {doc_id}: {metadata!r}")
    return doc_id, content or "", metadata


def build_index(entries: Sequence[BuildEntry]) -> InvertedIndex:
    """
    Build an inverted index from an ordered document sequence.

    Each entry is either a Document or a (document_id, content, metadata)
    tuple. Document lengths are recomputed from the retained tokens of the
    content, so a Document's own length field is ignored.

    Args:
        entries: Documents in the order their positions should take

    Returns:
        Populated InvertedIndex

    Raises:
        EmptyCorpusError: If entries is empty
        ValidationError: If an entry is malformed or an id is duplicated
    """
    entries = list(entries)
    if not entries:
        raise EmptyCorpusError("Cannot build an index from an empty corpus")

    index = InvertedIndex()
    seen_ids = set()
    total_length = 0

    for position, entry in enumerate(entries):
        doc_id, content, metadata = _normalize_entry(entry)

        if doc_id in seen_ids:
            raise ValidationError(f"Duplicate document ID found: {doc_id}")
        seen_ids.add(doc_id)

        counts = tokenize_with_counts(content)
        length = sum(counts.values())
        total_length += length

        for term, frequency in counts.items():
            index.terms.setdefault(term, []).append(Posting(position, frequency))

        try:
            document = Document(id=doc_id, content=content, length=length, metadata=metadata)
        except ValueError as e:
            raise ValidationError(f"Invalid document at position {position}: {e}")
        index.documents.append(document)

    index.total_docs = len(index.documents)
    index.avg_doc_length = total_length / index.total_docs

    logger.info(
        f"Built index: {index.total_docs} documents, {index.vocabulary_size} terms, "
        f"avg length {index.avg_doc_length:.1f}"
    )
    return index

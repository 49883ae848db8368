"""Curated keyword boost."""

from typing import TYPE_CHECKING, FrozenSet, Iterable

from ..models.document import DocumentMetadata
from .tokenizer import tokenize

if TYPE_CHECKING:
    from .index import InvertedIndex


def keyword_terms(metadata: DocumentMetadata) -> FrozenSet[str]:
    """Tokenize every curated keyword of a document into one term set."""
    terms = set()
    for keyword in metadata.keywords:
        terms |= tokenize(keyword)
    return frozenset(terms)


def keyword_score(index: "InvertedIndex", query_terms: Iterable[str], doc_id: int) -> float:
    """
    Count the query terms that match the document's curated keywords.

    Independent of content term frequency, so documents whose keyword tags
    match the query rank highly even when the BM25 signal is weak.
    """
    terms = keyword_terms(index.documents[doc_id].metadata)
    return float(sum(1 for term in query_terms if term in terms))

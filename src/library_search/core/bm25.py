"""
BM25 scoring over the inverted index.

Formula:
    score(D, Q) = Σ idf(t) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × |D| / avgdl))

    idf(t) = ln((N - df + 0.5) / (df + 0.5))

Where:
    tf = frequency of term t in document D
    df = number of documents containing t
    N = number of documents in the corpus
    |D| = retained token count of D
    avgdl = average document length

The smoothed IDF goes negative for terms present in most documents, so a
document score can be negative as well.
"""

import math
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .index import InvertedIndex

K1 = 1.2
B = 0.75


def term_frequency(index: "InvertedIndex", term: str, doc_id: int) -> int:
    """Return how often term occurs in the document, 0 when absent."""
    for posting in index.terms.get(term, ()):
        if posting.doc_id == doc_id:
            return posting.frequency
    return 0


def idf(index: "InvertedIndex", term: str) -> float:
    """
    Inverse document frequency of a term.

    Returns exactly 0.0 for terms missing from the index.
    """
    postings = index.terms.get(term)
    if not postings:
        return 0.0

    n = index.total_docs
    df = len(postings)
    return math.log((n - df + 0.5) / (df + 0.5))


def score(index: "InvertedIndex", query_terms: Iterable[str], doc_id: int) -> float:
    """
    Compute the BM25 score of a document for a bag of query terms.

    Args:
        index: Inverted index holding postings and corpus statistics
        query_terms: Normalized query terms
        doc_id: Position of the document in index.documents

    Returns:
        Sum of per-term contributions; terms absent from the document are skipped
    """
    doc_length = index.documents[doc_id].length
    if index.avg_doc_length > 0:
        length_ratio = doc_length / index.avg_doc_length
    else:
        length_ratio = 1.0

    norm = K1 * (1 - B + B * length_ratio)

    total = 0.0
    for term in query_terms:
        tf = term_frequency(index, term, doc_id)
        if tf == 0:
            continue

        total += idf(index, term) * (tf * (K1 + 1)) / (tf + norm)

    return total

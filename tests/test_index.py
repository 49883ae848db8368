"""Test inverted index construction, BM25 scoring and keyword boosting."""

import math
import pytest

from conftest import make_document, make_metadata
from library_search.core import bm25
from library_search.core.exceptions import EmptyCorpusError, ValidationError
from library_search.core.index import InvertedIndex, Posting, build_index
from library_search.core.keywords import keyword_score, keyword_terms
from library_search.core.tokenizer import tokenize, tokenize_with_counts
from library_search.models.document import Document


class TestBuildIndex:
    """Test build_index()."""

    def test_corpus_statistics(self, sample_entries, sample_index):
        """Totals and average length reflect retained tokens."""
        lengths = [sum(tokenize_with_counts(content).values()) for _, content, _ in sample_entries]

        assert sample_index.total_docs == 3
        assert [doc.length for doc in sample_index.documents] == lengths
        assert sample_index.avg_doc_length == pytest.approx(sum(lengths) / 3)

    def test_document_order_preserved(self, sample_entries, sample_index):
        """Documents keep their input positions."""
        assert [doc.id for doc in sample_index.documents] == [e[0] for e in sample_entries]

    def test_postings_reference_valid_documents(self, sample_index):
        """Every posting points into the document list."""
        for postings in sample_index.terms.values():
            for posting in postings:
                assert 0 <= posting.doc_id < sample_index.total_docs
                assert posting.frequency > 0

    def test_posting_frequencies_sum_to_occurrences(self, sample_entries, sample_index):
        """Per-term posting frequencies add up to corpus occurrences."""
        expected = {}
        for _, content, _ in sample_entries:
            for term, count in tokenize_with_counts(content).items():
                expected[term] = expected.get(term, 0) + count

        actual = {
            term: sum(p.frequency for p in postings)
            for term, postings in sample_index.terms.items()
        }
        assert actual == expected

    def test_term_frequencies(self, sample_index):
        """Known counts from the sample corpus."""
        assert sample_index.term_frequency("git", 0) == 3
        assert sample_index.term_frequency("retry", 1) == 2
        assert sample_index.term_frequency("helm", 0) == 0
        assert sample_index.document_frequency("retry") == 3

    def test_empty_corpus_rejected(self):
        """An index with zero documents is a build error."""
        with pytest.raises(EmptyCorpusError):
            build_index([])

    def test_duplicate_ids_rejected(self):
        """Document ids must be unique."""
        metadata = make_metadata("Bucket")

        with pytest.raises(ValidationError, match="Duplicate document ID"):
            build_index([("bucket", "s3 storage", metadata), ("bucket", "minio", metadata)])

    def test_malformed_entry_rejected(self):
        """Entries must carry typed metadata."""
        with pytest.raises(ValidationError):
            build_index([("bucket", "s3 storage", {"kind": "Bucket"})])

    def test_accepts_documents(self):
        """Document records are re-measured from their content."""
        doc = Document(id="alert", content="Alert events and alerts", length=999,
                       metadata=make_metadata("Alert"))

        index = build_index([doc])

        assert index.documents[0].length == 3
        assert index.term_frequency("alert", 0) == 2

    def test_zero_length_document(self):
        """Documents with no retained tokens are indexed with length zero."""
        index = build_index([
            ("empty", "the and for", make_metadata("Empty")),
            ("helm", "helm chart", make_metadata("Helm")),
        ])

        assert index.documents[0].length == 0
        assert index.avg_doc_length == 1.0

    def test_stats(self, sample_index):
        stats = sample_index.get_stats()

        assert stats['total_documents'] == 3
        assert stats['vocabulary_size'] == len(sample_index.terms)
        assert stats['total_postings'] >= stats['vocabulary_size']


class TestBM25:
    """Test IDF, term frequency and BM25 scoring."""

    def test_idf_rare_terms_score_higher(self):
        index = InvertedIndex(
            terms={
                "common": [Posting(0, 1), Posting(1, 1), Posting(2, 1)],
                "rare": [Posting(0, 1)],
            },
            total_docs=3,
        )

        assert index.idf("rare") > index.idf("common")

    def test_idf_unknown_term_is_zero(self, sample_index):
        assert sample_index.idf("termNotInIndex") == 0.0

    def test_idf_formula(self):
        index = InvertedIndex(terms={"test": [Posting(0, 1)]}, total_docs=10)

        assert index.idf("test") == pytest.approx(math.log((10 - 1 + 0.5) / (1 + 0.5)))

    def test_idf_can_be_negative(self, sample_index):
        """A term present in every document has negative IDF."""
        assert sample_index.idf("retry") < 0

    @pytest.mark.parametrize("term,doc_id,expected", [
        ("flux", 0, 5),
        ("flux", 1, 1),
        ("flux", 2, 0),
        ("nonexistent", 0, 0),
    ])
    def test_term_frequency(self, weighted_index, term, doc_id, expected):
        assert bm25.term_frequency(weighted_index, term, doc_id) == expected

    def test_score_prefers_more_matches(self, weighted_index):
        score0 = weighted_index.score(["flux", "helm"], 0)
        score1 = weighted_index.score(["flux", "helm"], 1)

        assert score0 > score1
        assert score0 > 0

    def test_score_formula(self, weighted_index):
        """Single term score matches the BM25 formula by hand."""
        idf = math.log((5 - 2 + 0.5) / (2 + 0.5))
        norm = bm25.K1 * (1 - bm25.B + bm25.B * 50 / 75)
        expected = idf * (1 * (bm25.K1 + 1)) / (1 + norm)

        assert weighted_index.score(["flux"], 1) == pytest.approx(expected)

    def test_non_matching_query_scores_zero(self, weighted_index):
        assert weighted_index.score(["termAbsentEverywhere"], 0) == 0
        assert weighted_index.score(["helm"], 3) == 0

    def test_term_frequency_saturation(self):
        """Higher frequency scores higher, but sub-linearly."""
        index = InvertedIndex(
            terms={"term": [Posting(0, 1), Posting(1, 10)]},
            documents=[make_document(f"doc{i}", 100) for i in range(5)],
            avg_doc_length=100,
            total_docs=5,
        )

        score1 = index.score(["term"], 0)
        score10 = index.score(["term"], 1)

        assert score10 > score1
        assert score10 < 10 * score1

    def test_longer_documents_score_lower(self):
        """Length normalization penalizes long documents at equal frequency."""
        index = InvertedIndex(
            terms={"term": [Posting(0, 2), Posting(1, 2)]},
            documents=[make_document(f"doc{i}", length) for i, length in enumerate([50, 200, 100, 100, 100])],
            avg_doc_length=110,
            total_docs=5,
        )

        assert index.score(["term"], 0) > index.score(["term"], 1)


class TestKeywordBoost:
    """Test curated keyword matching."""

    def test_keyword_terms_are_tokenized(self):
        metadata = make_metadata("Bucket", keywords=["managed-identity", "index.yaml", "Buckets"])

        assert keyword_terms(metadata) == frozenset({"managed-identity", "index", "yaml", "bucket"})

    def test_keyword_score_counts_matches(self):
        index = build_index([
            ("gitrepository", "git source",
             make_metadata("GitRepository", keywords=["git", "ssh", "tls", "auth"])),
        ])

        assert keyword_terms(index.documents[0].metadata) >= {"ssh", "tl"}
        assert keyword_score(index, tokenize("ssh tls helm"), 0) == 2.0
        assert index.keyword_score(["helm"], 0) == 0.0

    def test_keyword_score_without_keywords(self, sample_index):
        assert sample_index.keyword_score(["git"], 0) == 0.0

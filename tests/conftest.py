"""Pytest configuration and shared fixtures."""

import tempfile
import pytest
from pathlib import Path
from typing import List, Tuple

from library_search.core.index import InvertedIndex, Posting, build_index
from library_search.models.document import Document, DocumentMetadata


def make_metadata(kind: str, group: str = "test.toolkit.fluxcd.io", keywords=()) -> DocumentMetadata:
    return DocumentMetadata(
        group=group,
        kind=kind,
        url=f"https://example.com/docs/{kind.lower()}.md",
        keywords=tuple(keywords)
    )


def make_document(doc_id: str, length: int, kind: str = "Test") -> Document:
    """Document with a fixed length, for hand-built indexes."""
    return Document(id=doc_id, content="", length=length, metadata=make_metadata(kind))


@pytest.fixture
def sample_entries() -> List[Tuple[str, str, DocumentMetadata]]:
    """Three small Flux API documents."""
    return [
        (
            "gitrepository",
            "GitRepository defines a source for Git repositories. Authentication with SSH keys "
            "and HTTPS tokens. Configure reconciliation retry logic for git operations. "
            "The retry mechanism handles transient failures.",
            make_metadata("GitRepository", "source.toolkit.fluxcd.io"),
        ),
        (
            "helmrelease",
            "HelmRelease defines a Helm chart release. Configure drift detection and rollback. "
            "Set retry logic for failed deployments. The retry logic can be customized with "
            "intervals and backoff strategies.",
            make_metadata("HelmRelease", "helm.toolkit.fluxcd.io"),
        ),
        (
            "kustomization",
            "Kustomization defines a kustomize overlay. Configure health checks and retry "
            "intervals. Prune resources automatically. Retry logic helps recover from "
            "temporary errors during reconciliation.",
            make_metadata("Kustomization", "kustomize.toolkit.fluxcd.io"),
        ),
    ]


@pytest.fixture
def sample_index(sample_entries) -> InvertedIndex:
    """Index built from the sample entries."""
    return build_index(sample_entries)


@pytest.fixture
def weighted_index() -> InvertedIndex:
    """
    Hand-built five document index.

    "flux" appears in 2/5 documents and "helm" in 1/5, so both have positive IDF.
    """
    return InvertedIndex(
        terms={
            "flux": [Posting(0, 5), Posting(1, 1)],
            "helm": [Posting(0, 2)],
        },
        documents=[
            make_document("doc0", 100),
            make_document("doc1", 50),
            make_document("doc2", 75),
            make_document("doc3", 60),
            make_document("doc4", 90),
        ],
        avg_doc_length=75,
        total_docs=5,
    )


@pytest.fixture
def temp_index_path():
    """Create temporary directory for index storage."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)

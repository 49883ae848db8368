"""Search result data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .document import Document


@dataclass
class SearchResult:
    """
    Ranked search hit.

    Attributes:
        document: The matched document
        score: Combined BM25 and keyword boost score (may be negative)
        matched_terms: Query terms found in the document content
    """
    document: Document
    score: float
    matched_terms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        metadata = self.document.metadata
        return {
            "document_id": self.document.id,
            "group": metadata.group,
            "kind": metadata.kind,
            "url": metadata.url,
            "score": round(self.score, 4),
            "matched_terms": list(self.matched_terms)
        }

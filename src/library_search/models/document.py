"""Document data model with validation."""

from dataclasses import dataclass, field
from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class DocumentMetadata:
    """
    Catalog metadata attached to a library document.

    Attributes:
        group: API group of the documented resource (e.g. source.toolkit.fluxcd.io)
        kind: Resource kind the document describes (e.g. GitRepository)
        url: Source locator of the document body
        keywords: Curated keyword tags used for ranking boosts
    """
    group: str
    kind: str
    url: str
    keywords: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Normalize keywords into an immutable tuple."""
        if not isinstance(self.keywords, tuple):
            object.__setattr__(self, "keywords", tuple(self.keywords))


@dataclass(frozen=True)
class Document:
    """
    Searchable document owned by the inverted index.

    Attributes:
        id: Unique document identifier
        content: Full text content of the document
        length: Number of retained tokens, used for BM25 length normalization
        metadata: Catalog metadata
    """
    id: str
    content: str
    length: int
    metadata: DocumentMetadata

    def __post_init__(self) -> None:
        """Validate document after initialization."""
        if not self.id.strip():
            raise ValueError("Document ID cannot be empty")
        if self.length < 0:
            raise ValueError("Document length cannot be negative")


class MetadataModel(BaseModel):
    """Pydantic model for catalog metadata supplied by external callers."""

    group: str = Field(..., description="API group label")
    kind: str = Field(..., description="Resource kind label")
    url: str = Field("", description="Source URL of the document")
    keywords: List[str] = Field(default_factory=list, description="Curated keywords")

    @field_validator('keywords')
    @classmethod
    def strip_keywords(cls, v: List[str]) -> List[str]:
        """Drop blank keywords."""
        return [k.strip() for k in v if k and k.strip()]

    def to_metadata(self) -> DocumentMetadata:
        """Convert to DocumentMetadata dataclass."""
        return DocumentMetadata(
            group=self.group,
            kind=self.kind,
            url=self.url,
            keywords=tuple(self.keywords)
        )


class DocumentModel(BaseModel):
    """Pydantic model for index build input in API contexts."""

    id: str = Field(..., min_length=1, description="Unique document identifier")
    content: str = Field("", description="Document text content")
    metadata: MetadataModel

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ensure id is not just whitespace."""
        if not v.strip():
            raise ValueError('Document ID cannot be empty or whitespace only')
        return v.strip()

    def to_entry(self) -> Tuple[str, str, DocumentMetadata]:
        """Convert to an index build entry."""
        return (self.id, self.content, self.metadata.to_metadata())

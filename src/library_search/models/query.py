"""Query data model."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator


@dataclass
class Query:
    """
    Free-text search query.

    Attributes:
        text: Query text, reduced to a bag of terms at search time
        limit: Maximum number of results (<= 0 returns every candidate)
    """
    text: str
    limit: int = 5

    def __post_init__(self) -> None:
        """Validate query parameters."""
        if not isinstance(self.limit, int) or isinstance(self.limit, bool):
            raise ValueError("Limit must be an integer")


class QueryModel(BaseModel):
    """Pydantic model for query validation in API contexts."""

    text: str = Field("", description="Search query text")
    limit: int = Field(5, description="Maximum results to return, <= 0 for all")

    @field_validator('text')
    @classmethod
    def normalize_text(cls, v: str) -> str:
        """Collapse surrounding whitespace."""
        return v.strip()

    def to_query(self) -> Query:
        """Convert to Query dataclass."""
        return Query(text=self.text, limit=self.limit)

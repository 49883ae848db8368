"""Input validation utilities."""

from typing import Any, Dict, List, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError
from ..models.document import DocumentMetadata, DocumentModel
from ..models.query import Query, QueryModel


def validate_query(query: Any) -> Query:
    """
    Validate a query supplied as a Query, a mapping or a bare string.

    Raises:
        ValidationError: If query is invalid
    """
    if isinstance(query, Query):
        return query
    if isinstance(query, str):
        return Query(text=query)

    try:
        return QueryModel.model_validate(query).to_query()
    except PydanticValidationError as e:
        raise ValidationError(f"Query validation failed: {str(e)}")


def validate_entries(raw_entries: Sequence[Dict[str, Any]]) -> List[Tuple[str, str, DocumentMetadata]]:
    """
    Validate externally supplied documents and convert them to build entries.

    Args:
        raw_entries: Mappings with id, content and metadata fields

    Raises:
        ValidationError: If any document is invalid or ids repeat
    """
    if not raw_entries:
        raise ValidationError("Document list cannot be empty")

    entries = []
    doc_ids = set()
    for i, raw in enumerate(raw_entries):
        try:
            entry = DocumentModel.model_validate(raw).to_entry()
        except PydanticValidationError as e:
            raise ValidationError(f"Document {i} validation failed: {str(e)}")

        if entry[0] in doc_ids:
            raise ValidationError(f"Duplicate document ID found: {entry[0]}")
        doc_ids.add(entry[0])
        entries.append(entry)

    return entries

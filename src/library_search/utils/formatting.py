"""Markdown rendering of search results for tool responses."""

from typing import List, Sequence

from ..models.result import SearchResult

RESULT_SEPARATOR = "\n\n---\n\n"
NO_RESULTS_MESSAGE = "No documents found matching the query."


def generate_context_snippet(
    text: str,
    query_terms: Sequence[str],
    max_length: int = 300
) -> str:
    """
    Extract the window of text containing the most query terms.

    Args:
        text: Full document text
        query_terms: Terms to find context for
        max_length: Maximum snippet length

    Returns:
        Snippet with ellipses marking truncated ends
    """
    if not text or not query_terms:
        return text[:max_length] if text else ""

    text_lower = text.lower()
    terms = [term.lower() for term in query_terms]

    best_pos = 0
    max_matches = 0

    # Sliding window to find position with most query terms
    for i in range(0, max(len(text) - max_length, 0) + 1, 20):
        window = text_lower[i:i + max_length]
        matches = sum(1 for term in terms if term in window)

        if matches > max_matches:
            max_matches = matches
            best_pos = i

    snippet = text[best_pos:best_pos + max_length]

    # Don't cut words at the start
    if best_pos > 0 and not snippet.startswith(' '):
        space_pos = snippet.find(' ')
        if space_pos > 0:
            snippet = snippet[space_pos + 1:]

    end = best_pos + max_length
    if end < len(text) and not text[end:].startswith(' '):
        space_pos = snippet.rfind(' ')
        if space_pos > max_length * 0.8:
            snippet = snippet[:space_pos]

    snippet = snippet.strip()
    if best_pos > 0:
        snippet = "..." + snippet
    if end < len(text):
        snippet = snippet + "..."

    return snippet


def format_result_markdown(result: SearchResult, include_content: bool = True) -> str:
    """Render a single result as a markdown section."""
    metadata = result.document.metadata
    lines = [
        f"# {metadata.kind} ({metadata.group})",
        "",
        f"Source: {metadata.url}",
        f"Score: {result.score:.2f}",
    ]
    if result.matched_terms:
        lines.append(f"Matched terms: {', '.join(result.matched_terms)}")
    lines.append("")

    if include_content:
        lines.append(result.document.content.strip())
    else:
        lines.append(generate_context_snippet(result.document.content, result.matched_terms))

    return "\n".join(lines)


def format_results_markdown(results: List[SearchResult], include_content: bool = True) -> str:
    """
    Render ranked results as markdown sections separated by horizontal rules.

    Args:
        results: Ranked search results
        include_content: Full document bodies when True, context snippets otherwise
    """
    if not results:
        return NO_RESULTS_MESSAGE

    return RESULT_SEPARATOR.join(
        format_result_markdown(result, include_content) for result in results
    )

"""Test markdown rendering of search results."""

from library_search.core.engine import search
from library_search.utils.formatting import (
    NO_RESULTS_MESSAGE,
    RESULT_SEPARATOR,
    format_results_markdown,
    generate_context_snippet
)


class TestFormatResults:
    """Test format_results_markdown()."""

    def test_single_result(self, sample_index):
        results = search(sample_index, "SSH authentication", 1)

        markdown = format_results_markdown(results)

        assert markdown.startswith("# GitRepository (source.toolkit.fluxcd.io)")
        assert "Source: https://example.com/docs/gitrepository.md" in markdown
        assert f"Score: {results[0].score:.2f}" in markdown
        assert "Matched terms: authentication, ssh" in markdown
        assert results[0].document.content in markdown
        assert RESULT_SEPARATOR not in markdown

    def test_multiple_results_separated(self, sample_index):
        results = search(sample_index, "retry", 0)

        markdown = format_results_markdown(results)

        assert markdown.count(RESULT_SEPARATOR) == len(results) - 1
        assert markdown.count("\n# ") == len(results) - 1

    def test_no_results(self):
        assert format_results_markdown([]) == NO_RESULTS_MESSAGE

    def test_snippets_instead_of_content(self, sample_index):
        results = search(sample_index, "drift", 1)

        markdown = format_results_markdown(results, include_content=False)

        assert "drift" in markdown


class TestContextSnippet:
    """Test generate_context_snippet()."""

    def test_short_text_returned_whole(self):
        assert generate_context_snippet("Helm chart values", ["helm"], max_length=100) == "Helm chart values"

    def test_window_moves_to_terms(self):
        text = ("filler " * 100) + "the drift detection settings are here " + ("tail " * 100)

        snippet = generate_context_snippet(text, ["drift", "detection"], max_length=80)

        assert "drift detection" in snippet
        assert snippet.startswith("...")
        assert snippet.endswith("...")

    def test_no_terms(self):
        assert generate_context_snippet("abcdef", [], max_length=3) == "abc"
        assert generate_context_snippet("", ["helm"]) == ""

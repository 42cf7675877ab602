"""Fold search results into the context text handed to the model.

Citation numbers are positional: result `results[i - 1]` is source `[i]`,
both here and in every rendered result list.
"""

from collections.abc import Sequence

from ..config import (
    SEARCH_CONTEXT_HEADER,
    SEARCH_CONTEXT_INSTRUCTIONS,
    SEARCH_RESULT_SEPARATOR,
)
from ..search.models import SearchResult


def citation_label(index: int) -> str:
    """Bracketed citation key for a 1-based result index."""
    return f"[{index}]"


def format_search_result(index: int, result: SearchResult) -> str:
    """Format one result as a numbered source block."""
    lines = [
        f"Source {citation_label(index)}:",
        f"Title: {result.title}",
        f"URL: {result.url}",
    ]
    if result.author:
        lines.append(f"Author: {result.author}")
    if result.published_date:
        lines.append(f"Date: {result.published_date}")
    lines.append(f"Content: {result.text}")
    lines.append(SEARCH_RESULT_SEPARATOR)
    return "\n".join(lines)


def format_search_context(results: Sequence[SearchResult]) -> str:
    """Build the system-message text for a list of search results.

    Args:
        results: Results in provider order

    Returns:
        Context text, or "" when there is nothing to inject
    """
    if not results:
        return ""

    blocks = "\n\n".join(
        format_search_result(i, result) for i, result in enumerate(results, 1)
    )
    return f"{SEARCH_CONTEXT_HEADER}\n\n{blocks}\n\n{SEARCH_CONTEXT_INSTRUCTIONS}"

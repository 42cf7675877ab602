"""Text formatting utilities shared by the console and TUI renderers.

Hides the details of markdown rendering and citation list formatting.
"""

from collections.abc import Sequence

from rich.markdown import Markdown
from rich.text import Text

from ..chat.context import citation_label
from ..search.models import SearchResult


def render_markdown(text: str) -> Markdown:
    """Render a final answer as markdown."""
    return Markdown(text)


def render_plain(text: str, style: str = "") -> Text:
    """Render text verbatim, without markup parsing.

    User input and reasoning are shown preformatted, so brackets such as
    citation markers must not be read as Rich markup.
    """
    return Text(text, style=style, overflow="fold")


def result_line(index: int, result: SearchResult) -> Text:
    """`[i] title` with the title linking to the result URL."""
    line = Text(f"{citation_label(index)} ", style="dim")
    line.append(result.title or result.url, style=f"link {result.url}")
    return line


def render_result_list(results: Sequence[SearchResult]) -> Text:
    """Numbered result list; numbering matches the context citations."""
    return Text("\n").join(result_line(i, r) for i, r in enumerate(results, 1))


def truncate(text: str, limit: int) -> str:
    """Cut text to `limit` characters, marking the cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."

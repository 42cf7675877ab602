"""Rich renderables for the conversation transcript.

Used by the console commands, which repaint the whole transcript (or the
current turn) inside a rich Live display on every streamed chunk.
"""

from collections.abc import Callable, Sequence

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.text import Text

from ..chat.segmenter import SegmentedContent, segment
from ..chat.store import Message
from ..search.models import SearchResult
from .config import ASSISTANT_TITLE, RESULTS_TITLE, THINKING_TITLE, USER_TITLE
from .formatting import render_markdown, render_plain, render_result_list

ResultsLookup = Callable[[str], Sequence[SearchResult]]


def render_user_message(message: Message) -> RenderableType:
    """User content as plain preformatted text."""
    return Panel(
        render_plain(message.content),
        title=USER_TITLE,
        title_align="right",
        border_style="yellow",
    )


def render_thinking(segmented: SegmentedContent) -> RenderableType:
    title = THINKING_TITLE if segmented.is_complete else f"{THINKING_TITLE}..."
    return Panel(
        render_plain(segmented.thinking, style="dim"),
        title=title,
        title_align="left",
        border_style="dim",
    )


def render_assistant_message(message: Message) -> RenderableType:
    """Reasoning block (while present or streaming) followed by the answer."""
    segmented = segment(message.content)
    parts: list[RenderableType] = []
    if segmented.shows_thinking:
        parts.append(render_thinking(segmented))
    if segmented.shows_answer:
        parts.append(render_markdown(segmented.final_response))
    return Panel(
        Group(*parts),
        title=ASSISTANT_TITLE,
        title_align="left",
        border_style="cyan",
    )


def render_search_results(results: Sequence[SearchResult]) -> RenderableType:
    return Padding(
        Group(Text(RESULTS_TITLE, style="bold"), render_result_list(results)),
        (0, 0, 0, 2),
    )


def render_error(error: str) -> RenderableType:
    return Panel(Text(f"⚠️ {error}", style="red"), border_style="red")


def render_transcript(
    messages: Sequence[Message],
    results_for: ResultsLookup | None = None,
    error: str | None = None,
) -> RenderableType:
    """Render visible messages, each user turn followed by its results.

    Args:
        messages: Conversation snapshot; system messages are skipped
        results_for: Lookup of the results that accompanied a user message
        error: Current search error, shown after the transcript

    Returns:
        A renderable group
    """
    parts: list[RenderableType] = []
    for message in messages:
        if message.role == "user":
            parts.append(render_user_message(message))
            results = results_for(message.id) if results_for else ()
            if results:
                parts.append(render_search_results(results))
        elif message.role == "assistant":
            parts.append(render_assistant_message(message))
    if error:
        parts.append(render_error(error))
    return Group(*parts)

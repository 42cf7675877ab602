"""Rendering layer for searchchat.

Module structure (each module hides a design decision):
- formatting.py: markdown and citation-list rendering
- transcript.py: rich renderables for console output
- widgets.py: Textual widgets (input history, message views, log panel)
- styles.py: CSS styling (layout decisions)
- app.py: TUI orchestration (user interaction flow)
"""

from .app import SearchChatApp, run_textual_tui
from .transcript import (
    render_assistant_message,
    render_error,
    render_search_results,
    render_transcript,
    render_user_message,
)

__all__ = [
    "SearchChatApp",
    "render_assistant_message",
    "render_error",
    "render_search_results",
    "render_transcript",
    "render_user_message",
    "run_textual_tui",
]

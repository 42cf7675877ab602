"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Per-message rendering of reasoning, answer and search results
- Log panel rendering
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, RichLog, Static

from ..chat.orchestrator import AugmentationOrchestrator
from ..chat.segmenter import SegmentedContent, segment
from ..chat.store import Message
from ..search.models import SearchResult
from .config import (
    ASSISTANT_TITLE,
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    RESULTS_TITLE,
    SUBMIT_BUSY_LABEL,
    SUBMIT_LABEL,
    THINKING_TITLE,
    USER_TITLE,
)
from .formatting import render_markdown, render_plain, render_result_list, truncate


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_key(self, event) -> None:
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, command: str) -> None:
        if command and (not self._history or self._history[-1] != command):
            self._history.append(command)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Query input with a submit button that is disabled while searching."""

    class Submitted(TextualMessage):
        """Posted when the user submits a non-empty query."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button(SUBMIT_LABEL, id="send-btn", variant="primary", disabled=True)

    def on_input_changed(self, event: Input.Changed) -> None:
        button = self.query_one("#send-btn", Button)
        if str(button.label) != SUBMIT_BUSY_LABEL:
            button.disabled = not event.value.strip()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def _submit(self) -> None:
        button = self.query_one("#send-btn", Button)
        if str(button.label) == SUBMIT_BUSY_LABEL:
            return
        value = self.query_one("#chat-input", HistoryInput).value
        if value.strip():
            self.post_message(self.Submitted(value))

    def accept(self) -> None:
        """Clear the input once its query has been taken for a turn."""
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.add_to_history(text_input.value.strip())
        text_input.value = ""

    def set_busy(self, busy: bool) -> None:
        """Reflect the search loading flag on the submit control."""
        button = self.query_one("#send-btn", Button)
        button.label = SUBMIT_BUSY_LABEL if busy else SUBMIT_LABEL
        text_input = self.query_one("#chat-input", HistoryInput)
        button.disabled = busy or not text_input.value.strip()

    def focus_input(self) -> None:
        self.query_one("#chat-input", HistoryInput).focus()


class UserMessageView(Vertical):
    """A user turn: the query followed by the results searched for it."""

    def __init__(self, message: Message, results: Sequence[SearchResult], **kwargs) -> None:
        super().__init__(classes="chat-message user-message", **kwargs)
        self.message = message
        self._results = list(results)

    def compose(self):
        yield Static(USER_TITLE, classes="message-header")
        yield Static(render_plain(self.message.content), classes="message-content")
        if self._results:
            with Vertical(classes="search-results"):
                yield Static(RESULTS_TITLE, classes="section-title")
                yield Static(render_result_list(self._results), classes="result-list")


class AssistantMessageView(Vertical):
    """An assistant reply, re-rendered from its segmentation on each chunk."""

    def __init__(self, message: Message, **kwargs) -> None:
        super().__init__(classes="chat-message assistant-message", **kwargs)
        self.message = message

    def compose(self):
        yield Static(ASSISTANT_TITLE, classes="message-header")
        with Vertical(classes="thinking-block"):
            yield Static(THINKING_TITLE, classes="section-title thinking-title")
            yield Static("", classes="thinking-content")
        yield Static("", classes="answer-content")

    def on_mount(self) -> None:
        self.refresh_content(self.message)

    def refresh_content(self, message: Message) -> None:
        self.message = message
        self._apply(segment(message.content))

    def _apply(self, segmented: SegmentedContent) -> None:
        thinking_block = self.query_one(".thinking-block", Vertical)
        thinking_block.display = segmented.shows_thinking
        title = THINKING_TITLE if segmented.is_complete else f"{THINKING_TITLE}..."
        self.query_one(".thinking-title", Static).update(title)
        self.query_one(".thinking-content", Static).update(
            render_plain(segmented.thinking)
        )

        answer = self.query_one(".answer-content", Static)
        answer.display = segmented.shows_answer
        if segmented.shows_answer:
            answer.update(render_markdown(segmented.final_response))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript kept in step with the conversation store."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._views: dict[str, UserMessageView | AssistantMessageView] = {}

    def sync(self, orchestrator: AugmentationOrchestrator) -> None:
        """Mount views for new visible messages and refresh changed ones."""
        visible = orchestrator.store.visible()
        for message in visible:
            view = self._views.get(message.id)
            if view is None:
                if message.role == "user":
                    view = UserMessageView(message, orchestrator.results_for(message.id))
                else:
                    view = AssistantMessageView(message)
                self._views[message.id] = view
                self.mount(view)
            elif isinstance(view, AssistantMessageView) and view.message.content != message.content:
                if view.is_mounted:
                    view.refresh_content(message)
                else:
                    view.message = message
        self.border_subtitle = f"{len(visible)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Final answer of the last assistant message, if any."""
        for view in reversed(list(self._views.values())):
            if isinstance(view, AssistantMessageView):
                return segment(view.message.content).final_response or None
        return None

    def clear_history(self) -> None:
        self._views.clear()
        self.remove_children()
        self.border_subtitle = "Conversation history"


class ErrorBanner(Static):
    """Shows the current search error until the next successful turn."""

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, error: str | None) -> None:
        if error:
            self.update(Text(f"⚠️ {error}"))
            self.display = True
        else:
            self.update("")
            self.display = False


class LogPanel(RichLog):
    """Log panel fed by the package logger.

    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"

    LEVEL_COLORS = {
        logging.DEBUG: "dim white",
        logging.INFO: "cyan",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "bold red",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, auto_scroll=True, wrap=True, **kwargs)

    def on_mount(self) -> None:
        self.display = False

    def write_record(self, record: logging.LogRecord) -> None:
        timestamp = datetime.fromtimestamp(record.created).strftime(LOG_TIMESTAMP_FORMAT)
        color = self.LEVEL_COLORS.get(record.levelno, "white")
        line = Text(f"{timestamp} ", style="dim")
        line.append(f"{record.levelname:<7}", style=color)
        line.append(f" [{record.name}] ", style="magenta")
        line.append(truncate(record.getMessage(), LOG_MAX_MESSAGE_LENGTH))
        self.write(line)

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        self.display = not self.display
        return self.display


class LogPanelHandler(logging.Handler):
    """Routes log records into a LogPanel.

    Records arrive on the app's event loop, so the panel is written directly.
    """

    def __init__(self, panel: LogPanel, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self._panel = panel

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._panel.write_record(record)
        except Exception:
            self.handleError(record)

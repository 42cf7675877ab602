"""Main Textual TUI application.

Wires the chat widgets to an AugmentationOrchestrator: each submission runs
one search-augmented turn in a background async worker, and orchestrator
callbacks keep the transcript, submit control and error banner in step.
"""

import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat.orchestrator import AugmentationOrchestrator
from ..chat.segmenter import SegmentedContent
from ..chat.store import Message
from ..config import LOGGER_NAME
from ..errors import TurnInProgressError
from ..llm.base import LLMProvider
from ..search.base import SearchClient
from .styles import APP_CSS
from .widgets import ChatHistoryWidget, ChatInputBar, ErrorBanner, LogPanel, LogPanelHandler

logger = logging.getLogger(__name__)


class SearchChatApp(App):
    """Textual TUI for search-augmented chat."""

    CSS = APP_CSS
    TITLE = "searchchat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Answer"),
        Binding("ctrl+d", "toggle_log", "Log"),
    ]

    def __init__(
        self,
        llm: LLMProvider,
        search_client: SearchClient,
        log_level: str | None = None,
        **completion_kwargs,
    ) -> None:
        super().__init__()
        self._log_level = log_level
        self._log_handler: LogPanelHandler | None = None
        self._orchestrator = AugmentationOrchestrator(
            search_client=search_client,
            llm=llm,
            on_update=self._on_stream_update,
            on_change=self._on_orchestrator_change,
            **completion_kwargs,
        )
        self._model_name = llm.model

    @property
    def orchestrator(self) -> AugmentationOrchestrator:
        return self._orchestrator

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield ErrorBanner(id="error-banner")
        yield LogPanel(id="log-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.theme = "catppuccin-mocha"
        self.sub_title = self._model_name

        if self._log_level is not None:
            panel = self.query_one("#log-panel", LogPanel)
            panel.display = True
            level = logging.getLevelName(self._log_level.upper())
            self._log_handler = LogPanelHandler(panel, level if isinstance(level, int) else logging.DEBUG)
            package_logger = logging.getLogger(LOGGER_NAME)
            package_logger.addHandler(self._log_handler)
            package_logger.setLevel(self._log_handler.level)
            logger.info("Log panel enabled with level %s", self._log_level.upper())

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        if self._log_handler is not None:
            logging.getLogger(LOGGER_NAME).removeHandler(self._log_handler)
            self._log_handler = None

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        # A rejected query stays in the input for the user to resend
        if self._orchestrator.in_flight:
            self.notify("Still answering the previous question", severity="warning", timeout=2)
            return
        self.query_one("#chat-input-bar", ChatInputBar).accept()
        self._run_turn(event.value)

    @work(exclusive=True)
    async def _run_turn(self, user_input: str) -> None:
        """Run one turn as a background async worker."""
        try:
            outcome = await self._orchestrator.submit(user_input)
        except TurnInProgressError as e:
            self.notify(str(e), severity="warning", timeout=2)
            return

        if outcome.model_error:
            self.notify(f"Model error: {outcome.model_error[:50]}", severity="error", timeout=5)

    def _on_stream_update(self, message: Message, segmented: SegmentedContent) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).sync(self._orchestrator)

    def _on_orchestrator_change(self, orchestrator: AugmentationOrchestrator) -> None:
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(orchestrator.is_loading)
        self.query_one("#error-banner", ErrorBanner).show_error(orchestrator.error)
        self.query_one("#chat-history", ChatHistoryWidget).sync(orchestrator)

    def action_clear_chat(self) -> None:
        try:
            self._orchestrator.reset()
        except TurnInProgressError as e:
            self.notify(str(e), severity="warning", timeout=2)
            return
        self.query_one("#chat-history", ChatHistoryWidget).clear_history()
        self.notify("Chat cleared", timeout=2)

    def action_copy_last_response(self) -> None:
        response = self.query_one("#chat-history", ChatHistoryWidget).get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Answer copied")
        else:
            self.notify("No answer to copy", severity="warning")

    def action_toggle_log(self) -> None:
        is_visible = self.query_one("#log-panel", LogPanel).toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    llm: LLMProvider,
    search_client: SearchClient,
    log_level: str | None = None,
    **completion_kwargs,
) -> None:
    """Run the Textual TUI.

    Args:
        llm: Model collaborator
        search_client: Search collaborator
        log_level: Log level for the log panel, None to hide it
        **completion_kwargs: Passed through to the model request
    """
    app = SearchChatApp(
        llm=llm,
        search_client=search_client,
        log_level=log_level,
        **completion_kwargs,
    )
    await app.run_async()

"""Search-augmented chat turn orchestration.

A turn moves through IDLE -> SEARCHING -> (SEARCH_FAILED | AUGMENTING ->
REQUESTING) -> IDLE:

1. Search with the query and the prior-query window.
2. On failure record the error and stop; nothing is written to the store.
3. On success inject the formatted results as a system message (only if
   there are any), append the user message and dispatch the model request.
4. Record the query in the history, drop the loading flag and stream the
   reply into a new assistant message, re-segmenting on every chunk.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import SearchError, TurnInProgressError
from ..llm.base import LLMProvider
from ..llm.models import StreamingResponse, TokenUsage
from ..search.base import SearchClient
from ..search.models import SearchRequest, SearchResult
from .context import format_search_context
from .history import QueryHistory
from .segmenter import SegmentedContent, segment
from .store import ConversationStore, Message

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    """Orchestrator phase for the current turn."""

    IDLE = "idle"
    SEARCHING = "searching"
    SEARCH_FAILED = "search_failed"
    AUGMENTING = "augmenting"
    REQUESTING = "requesting"


@dataclass
class TurnOutcome:
    """What a single `submit` call did."""

    state: TurnState
    skipped: bool = False
    results: list[SearchResult] = field(default_factory=list)
    error: str | None = None
    model_error: str | None = None
    system_message: Message | None = None
    user_message: Message | None = None
    assistant_message: Message | None = None
    usage: TokenUsage | None = None

    @property
    def augmented(self) -> bool:
        """Whether search context was injected for this turn."""
        return self.system_message is not None


UpdateCallback = Callable[[Message, SegmentedContent], None]
ChangeCallback = Callable[["AugmentationOrchestrator"], None]


class AugmentationOrchestrator:
    """Runs search-augmented chat turns against an injectable store.

    Hidden design decisions:
    - Ordering of search, context injection and model dispatch
    - When the query history and loading flag are updated
    - Containment of search and model failures within a turn
    """

    def __init__(
        self,
        search_client: SearchClient,
        llm: LLMProvider,
        store: ConversationStore | None = None,
        history: QueryHistory | None = None,
        on_update: UpdateCallback | None = None,
        on_change: ChangeCallback | None = None,
        **completion_kwargs: Any
    ):
        """Initialize the orchestrator.

        Args:
            search_client: Search collaborator
            llm: Model collaborator
            store: Conversation log (a fresh one if omitted)
            history: Starting query history
            on_update: Called with the trailing assistant message and its
                segmentation after every streamed chunk
            on_change: Called whenever state, loading flag or error changes
            **completion_kwargs: Passed to chat_completion_stream (model, temperature, ...)
        """
        self._search_client = search_client
        self._llm = llm
        self._store = store if store is not None else ConversationStore()
        self._history = history or QueryHistory()
        self._on_update = on_update
        self._on_change = on_change
        self._completion_kwargs = completion_kwargs

        self._state = TurnState.IDLE
        self._is_loading = False
        self._in_flight = False
        self._search_results: list[SearchResult] = []
        self._results_by_turn: dict[str, tuple[SearchResult, ...]] = {}
        self._error: str | None = None
        self._model_error: str | None = None

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def history(self) -> QueryHistory:
        return self._history

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_loading(self) -> bool:
        """True only while the search phase is unresolved."""
        return self._is_loading

    @property
    def in_flight(self) -> bool:
        """True while a turn (search or generation) is outstanding."""
        return self._in_flight

    @property
    def search_results(self) -> list[SearchResult]:
        """Results of the latest turn."""
        return list(self._search_results)

    @property
    def error(self) -> str | None:
        """Human-readable search error of the latest turn."""
        return self._error

    @property
    def model_error(self) -> str | None:
        """Model stream error of the latest turn."""
        return self._model_error

    def results_for(self, user_message_id: str) -> tuple[SearchResult, ...]:
        """Search results that accompanied a given user message."""
        return self._results_by_turn.get(user_message_id, ())

    def reset(self) -> None:
        """Forget the conversation, history and per-turn results."""
        if self._in_flight:
            raise TurnInProgressError("Cannot reset while a turn is in progress")
        self._store.clear()
        self._history = QueryHistory()
        self._search_results = []
        self._results_by_turn.clear()
        self._error = None
        self._model_error = None
        self._notify_change()

    async def submit(self, user_input: str) -> TurnOutcome:
        """Run one search-augmented turn.

        Args:
            user_input: Raw user query

        Returns:
            TurnOutcome describing what happened

        Raises:
            TurnInProgressError: If another turn is still outstanding
        """
        if not user_input.strip():
            return TurnOutcome(state=TurnState.IDLE, skipped=True)
        if self._in_flight:
            raise TurnInProgressError("A turn is already in progress")

        self._in_flight = True
        try:
            return await self._run_turn(user_input)
        finally:
            self._in_flight = False
            self._is_loading = False
            self._set_state(TurnState.IDLE)

    async def _run_turn(self, user_input: str) -> TurnOutcome:
        self._search_results = []
        self._error = None
        self._model_error = None
        self._is_loading = True
        self._set_state(TurnState.SEARCHING)

        request = SearchRequest(query=user_input, previous_queries=list(self._history.window()))
        try:
            results = await self._search_client.search(request)
        except SearchError as e:
            logger.warning("Search failed for %r: %s", user_input, e)
            self._error = str(e) or "Search failed"
            self._is_loading = False
            self._set_state(TurnState.SEARCH_FAILED)
            return TurnOutcome(state=TurnState.SEARCH_FAILED, error=self._error)

        self._search_results = list(results)
        self._set_state(TurnState.AUGMENTING)

        system_message = None
        context = format_search_context(results)
        if context:
            system_message = self._store.append("system", context)
        user_message = self._store.append("user", user_input)
        self._results_by_turn[user_message.id] = tuple(results)
        logger.debug(
            "Augmented turn with %d results (system message injected: %s)",
            len(results), system_message is not None,
        )

        self._set_state(TurnState.REQUESTING)
        outcome = TurnOutcome(
            state=TurnState.REQUESTING,
            results=list(results),
            system_message=system_message,
            user_message=user_message,
        )

        try:
            stream = await self._llm.chat_completion_stream(
                self._store.as_chat_messages(), **self._completion_kwargs
            )
        except Exception as e:
            stream = None
            self._record_model_error(e)
            outcome.model_error = self._model_error

        self._history = self._history.append(user_input)
        self._is_loading = False
        self._notify_change()

        if stream is not None:
            outcome.assistant_message = await self._consume(stream)
            outcome.model_error = self._model_error
            outcome.usage = stream.usage
        return outcome

    async def _consume(self, stream: StreamingResponse) -> Message | None:
        """Mirror the growing stream buffer into a trailing assistant message."""
        assistant: Message | None = None
        chunks = aiter(stream)
        while True:
            # Only the provider's errors are contained; callback errors propagate
            try:
                await anext(chunks)
            except StopAsyncIteration:
                break
            except Exception as e:
                # The partial assistant message stays in the store as-is
                self._record_model_error(e)
                break

            content = stream.text
            if assistant is None:
                assistant = self._store.append("assistant", content)
            else:
                assistant = self._store.replace_content(assistant.id, content)
            if self._on_update is not None:
                self._on_update(assistant, segment(content))
        return assistant

    def _record_model_error(self, error: Exception) -> None:
        logger.error("Model response failed: %s", error)
        self._model_error = str(error) or error.__class__.__name__
        self._notify_change()

    def _set_state(self, state: TurnState) -> None:
        if state != self._state:
            logger.debug("Turn state %s -> %s", self._state.value, state.value)
        self._state = state
        self._notify_change()

    def _notify_change(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

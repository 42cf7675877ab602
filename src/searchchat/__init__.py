"""
searchchat: a terminal chat client that grounds each answer in live web search.

Each turn searches the web, injects the numbered results as a system message,
and streams the model's reasoning and final answer separately.
"""

__version__ = "0.1.0"

from .chat import (
    AugmentationOrchestrator,
    ConversationStore,
    Message,
    QueryHistory,
    SegmentedContent,
    TurnOutcome,
    TurnState,
    format_search_context,
    segment,
)
from .search import SearchResult

__all__ = [
    "AugmentationOrchestrator",
    "ConversationStore",
    "Message",
    "QueryHistory",
    "SearchResult",
    "SegmentedContent",
    "TurnOutcome",
    "TurnState",
    "format_search_context",
    "segment",
]

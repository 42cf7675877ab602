"""Chat core: segmentation, query history, search context, store, orchestration.

Module structure (each module hides a design decision):
- segmenter.py: how reasoning and answer are told apart in streamed text
- history.py: which prior queries accompany a search
- context.py: how search results are presented to the model
- store.py: how the conversation is held and projected for display
- orchestrator.py: the order in which a turn talks to its collaborators
"""

from .context import citation_label, format_search_context, format_search_result
from .history import QueryHistory
from .orchestrator import AugmentationOrchestrator, TurnOutcome, TurnState
from .segmenter import SegmentedContent, segment
from .store import ConversationStore, Message

__all__ = [
    "AugmentationOrchestrator",
    "ConversationStore",
    "Message",
    "QueryHistory",
    "SegmentedContent",
    "TurnOutcome",
    "TurnState",
    "citation_label",
    "format_search_context",
    "format_search_result",
    "segment",
]

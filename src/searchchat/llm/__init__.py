"""Model collaborator: streaming chat providers.

Every provider yields text in which reasoning sits between <think> markers,
whatever form the underlying API reports it in.
"""

from .base import LLMProvider
from .factory import PROVIDERS, create_llm_provider
from .models import ChatMessage, LLMResponse, Role, StreamingResponse, TokenUsage
from .providers import DeepSeekProvider, OpenAIProvider

__all__ = [
    "PROVIDERS",
    "ChatMessage",
    "DeepSeekProvider",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "Role",
    "StreamingResponse",
    "TokenUsage",
    "create_llm_provider",
]

from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse, StreamingResponse


class LLMProvider(ABC):
    """The model collaborator of a chat turn.

    A provider receives the whole conversation, injected search context
    included, and answers with text in which any chain of thought sits
    between <think> and </think>. Models that report reasoning out of band
    are folded into that form by their provider, so downstream code only
    ever segments one buffer.

    Hidden design decisions:
    - SDK client setup and authentication
    - Where reasoning comes from (inline tags or a separate delta field)
    - Which SDK failures become ModelTransportError

    Providers are async context managers:
        async with provider:
            stream = await provider.chat_completion_stream(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model used when a call does not name one."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Answer in one piece.

        Raises:
            ModelTransportError: If the request fails
        """

    @abstractmethod
    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Answer as a stream of text chunks.

        Nothing is sent until the returned stream is first iterated, so
        transport failures surface as ModelTransportError from iteration,
        not from this call.

        Args:
            messages: Ordered conversation, system messages included
            model: Overrides `self.model`
            temperature: Sampling temperature
            max_tokens: Generation cap
            **kwargs: Passed to the SDK request
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the SDK client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

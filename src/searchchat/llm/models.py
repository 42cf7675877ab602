"""Types exchanged with the model collaborator."""

from collections.abc import AsyncIterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]


class ChatMessage(BaseModel):
    """A role/content pair in the model request."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="system messages carry the injected search context")
    content: str = Field(description="Message text")


class TokenUsage(BaseModel):
    """Token accounting reported at the end of a completion."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = Field(default=0, description="Request tokens, search context included")
    completion_tokens: int = Field(default=0, description="Generated tokens, reasoning included")
    total_tokens: int = 0

    @classmethod
    def from_sdk(cls, usage: Any) -> "TokenUsage":
        """Build from an OpenAI SDK `CompletionUsage`."""
        return cls(
            prompt_tokens=usage.prompt_tokens or 0,
            completion_tokens=usage.completion_tokens or 0,
            total_tokens=usage.total_tokens or 0,
        )


class LLMResponse(BaseModel):
    """A complete, non-streamed reply."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Reply text, reasoning inline between <think> markers")
    model: str = Field(description="Model that generated the reply")
    usage: TokenUsage | None = None


class StreamingResponse:
    """Async iterator over the text chunks of a streamed reply.

    The text yielded so far is kept, so a consumer can re-read the whole
    marked-up buffer after every chunk. Usage arrives with the final chunk
    and is attached by the provider.

    Usage:
        stream = await provider.chat_completion_stream(messages)
        async for _ in stream:
            render(segment(stream.text))
        print(stream.usage)
    """

    def __init__(self, chunks: AsyncIterator[str]):
        self._chunks = chunks
        self._parts: list[str] = []
        self._usage: TokenUsage | None = None
        self._done = False

    @property
    def text(self) -> str:
        """Concatenation of every chunk yielded so far."""
        return "".join(self._parts)

    @property
    def done(self) -> bool:
        """True once the provider stream is exhausted."""
        return self._done

    @property
    def usage(self) -> TokenUsage | None:
        return self._usage

    def set_usage(self, usage: TokenUsage) -> None:
        self._usage = usage

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        try:
            chunk = await self._chunks.__anext__()
        except StopAsyncIteration:
            self._done = True
            raise
        self._parts.append(chunk)
        return chunk

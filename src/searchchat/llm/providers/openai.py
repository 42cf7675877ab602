import logging
from collections.abc import AsyncIterator, Iterator
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from ...config import THINK_END, THINK_START
from ...errors import ModelTransportError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, StreamingResponse, TokenUsage

logger = logging.getLogger(__name__)


class ReasoningFolder:
    """Turns separate reasoning and content deltas into one marked-up stream.

    A reasoning run opens with THINK_START; the first content delta after it
    closes it with THINK_END. `finish` closes a run the stream ended in.
    """

    def __init__(self) -> None:
        self._in_reasoning = False

    def feed(self, reasoning: str | None, content: str | None) -> Iterator[str]:
        if reasoning:
            if not self._in_reasoning:
                self._in_reasoning = True
                yield THINK_START
            yield reasoning
        if content:
            if self._in_reasoning:
                self._in_reasoning = False
                yield THINK_END
            yield content

    def finish(self) -> Iterator[str]:
        if self._in_reasoning:
            self._in_reasoning = False
            yield THINK_END


class OpenAIProvider(LLMProvider):
    """Any server speaking the OpenAI chat completions API.

    Hidden design decisions:
    - AsyncOpenAI client construction (base_url makes it any compatible server)
    - Folding `reasoning_content` into inline <think> markup
    - Mapping openai.APIError and httpx read errors onto ModelTransportError
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize the provider.

        Args:
            api_key: API key for the server
            model: Default model
            base_url: Server URL; None means api.openai.com
            organization: Optional OpenAI organization id
            **client_kwargs: Passed to AsyncOpenAI (timeout, max_retries, http_client)
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    def _request_params(
        self,
        messages: list[ChatMessage],
        model: str | None,
        temperature: float,
        max_tokens: int | None,
        **kwargs: Any
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [message.model_dump() for message in messages],
            "temperature": temperature,
            **kwargs
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        return params

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        params = self._request_params(messages, model, temperature, max_tokens, **kwargs)
        try:
            completion = await self._client.chat.completions.create(**params)
        except openai.APIError as e:
            raise ModelTransportError(f"Model request failed: {e}") from e

        message = completion.choices[0].message
        folder = ReasoningFolder()
        parts = [
            *folder.feed(getattr(message, "reasoning_content", None), message.content),
            *folder.finish(),
        ]
        return LLMResponse(
            content="".join(parts),
            model=completion.model,
            usage=TokenUsage.from_sdk(completion.usage) if completion.usage else None,
        )

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        params = self._request_params(messages, model, temperature, max_tokens, **kwargs)
        params.update(stream=True, stream_options={"include_usage": True})
        response = StreamingResponse(self._deltas(params, lambda usage: response.set_usage(usage)))
        return response

    async def _deltas(self, params: dict[str, Any], on_usage) -> AsyncIterator[str]:
        folder = ReasoningFolder()
        try:
            stream = await self._client.chat.completions.create(**params)
            async for chunk in stream:
                # include_usage puts usage on a final chunk with no choices
                if chunk.usage is not None:
                    on_usage(TokenUsage.from_sdk(chunk.usage))
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                for text in folder.feed(getattr(delta, "reasoning_content", None), delta.content):
                    yield text
        except (openai.APIError, httpx.HTTPError) as e:
            # Read errors while consuming the SSE body are not wrapped by the SDK
            logger.debug("Stream from %s aborted: %s", params["model"], e)
            raise ModelTransportError(f"Model stream failed: {e}") from e

        for text in folder.finish():
            yield text

    async def close(self) -> None:
        await self._client.close()

"""Pytest configuration and shared fixtures."""
import asyncio
import os
from collections.abc import Callable
from typing import Any

import pytest

from searchchat.errors import ModelTransportError
from searchchat.llm.base import LLMProvider
from searchchat.llm.models import ChatMessage, LLMResponse, StreamingResponse, TokenUsage
from searchchat.search.base import SearchClient
from searchchat.search.models import SearchRequest, SearchResult


class FakeSearchClient(SearchClient):
    """In-process search collaborator with scripted results or errors."""

    def __init__(self, results: list[SearchResult] | None = None) -> None:
        self.results = list(results or [])
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.on_search: Callable[[SearchRequest], None] | None = None
        self.requests: list[SearchRequest] = []
        self.closed = False

    async def search(self, request: SearchRequest) -> list[SearchResult]:
        self.requests.append(request)
        if self.on_search is not None:
            self.on_search(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.results)

    async def close(self) -> None:
        self.closed = True


class FakeLLMProvider(LLMProvider):
    """Model collaborator that streams scripted chunks."""

    def __init__(self, chunks: list[str] | None = None) -> None:
        self.chunks = list(chunks or [])
        self.fail_after: int | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[list[ChatMessage]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append(list(messages))
        return LLMResponse(content="".join(self.chunks), model=self.model)

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        self.calls.append(list(messages))
        response = StreamingResponse(self._generate())
        self._response = response
        return response

    async def _generate(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise ModelTransportError("Model stream failed: connection reset")
            yield chunk
            if self.gate is not None:
                await self.gate.wait()
        self._response.set_usage(TokenUsage(prompt_tokens=10, completion_tokens=5, total_tokens=15))

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "deepseek": os.getenv("DEEPSEEK_API_KEY")
    }


@pytest.fixture
def sample_results() -> list[SearchResult]:
    """Two results, the first with every optional field set."""
    return [
        SearchResult(
            title="Weather Today - National Forecast",
            url="https://weather.example.com/today",
            text="Sunny with a high of 24C.",
            author="Jane Forecaster",
            publishedDate="2024-05-01",
        ),
        SearchResult(
            title="Local Weather Radar",
            url="https://radar.example.org",
            text="Light rain expected in the evening.",
        ),
    ]


@pytest.fixture
def search_client(sample_results) -> FakeSearchClient:
    return FakeSearchClient(sample_results)


@pytest.fixture
def llm() -> FakeLLMProvider:
    return FakeLLMProvider([
        "<think>Let me check",
        " the data</think>",
        "The answer is 42",
    ])

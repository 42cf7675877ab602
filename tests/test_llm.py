"""Unit tests for the LLM providers."""
from types import SimpleNamespace

import httpx
import openai
import pytest

from searchchat.errors import ModelTransportError
from searchchat.llm import (
    ChatMessage,
    DeepSeekProvider,
    LLMProvider,
    OpenAIProvider,
    StreamingResponse,
    TokenUsage,
    create_llm_provider,
)
from searchchat.llm.providers.openai import ReasoningFolder


def delta_chunk(content=None, reasoning=None):
    delta = SimpleNamespace(content=content, reasoning_content=reasoning)
    return SimpleNamespace(usage=None, choices=[SimpleNamespace(delta=delta)])


def usage_chunk(prompt=3, completion=4):
    usage = SimpleNamespace(
        prompt_tokens=prompt, completion_tokens=completion, total_tokens=prompt + completion
    )
    return SimpleNamespace(usage=usage, choices=[])


async def _iterate(items):
    for item in items:
        yield item


class FakeCompletions:
    """Stands in for AsyncOpenAI().chat.completions."""

    def __init__(self, chunks=None, completion=None, error=None):
        self.chunks = chunks or []
        self.completion = completion
        self.error = error
        self.params = None

    async def create(self, **params):
        self.params = params
        if self.error is not None:
            raise self.error
        if params.get("stream"):
            return _iterate(self.chunks)
        return self.completion


def provider_with(completions: FakeCompletions) -> OpenAIProvider:
    provider = OpenAIProvider(api_key="test-key")
    provider._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return provider


def _returning(completions: FakeCompletions, body):
    async def create(**params):
        completions.params = params
        return body

    return create


async def collect(stream: StreamingResponse) -> list[str]:
    return [chunk async for chunk in stream]


MESSAGES = [ChatMessage(role="user", content="hi")]


class TestLLMProvider:
    """Tests for LLMProvider interface."""

    def test_llm_provider_is_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestOpenAIStreaming:
    """Tests for reasoning/answer folding in the streamed output."""

    @pytest.mark.asyncio
    async def test_reasoning_wrapped_in_markers(self):
        """Test that reasoning deltas are emitted between think markers."""
        completions = FakeCompletions(chunks=[
            delta_chunk(reasoning="Let me"),
            delta_chunk(reasoning=" check"),
            delta_chunk(content="The answer"),
            delta_chunk(content=" is 42"),
            usage_chunk(),
        ])
        stream = await provider_with(completions).chat_completion_stream(MESSAGES)

        chunks = await collect(stream)

        assert "".join(chunks) == "<think>Let me check</think>The answer is 42"
        assert stream.text == "<think>Let me check</think>The answer is 42"
        assert stream.done is True
        assert stream.usage == TokenUsage(prompt_tokens=3, completion_tokens=4, total_tokens=7)

    @pytest.mark.asyncio
    async def test_plain_content_untouched(self):
        completions = FakeCompletions(chunks=[delta_chunk(content="Hello"), delta_chunk(content="!")])
        stream = await provider_with(completions).chat_completion_stream(MESSAGES)

        assert await collect(stream) == ["Hello", "!"]
        assert stream.usage is None

    @pytest.mark.asyncio
    async def test_unterminated_reasoning_closed(self):
        """Test that a stream ending mid-reasoning still closes the marker."""
        completions = FakeCompletions(chunks=[delta_chunk(reasoning="hmm")])
        stream = await provider_with(completions).chat_completion_stream(MESSAGES)

        assert "".join(await collect(stream)) == "<think>hmm</think>"

    @pytest.mark.asyncio
    async def test_request_params(self):
        completions = FakeCompletions(chunks=[])
        provider = provider_with(completions)

        stream = await provider.chat_completion_stream(MESSAGES, temperature=0.1, max_tokens=50)
        await collect(stream)

        assert completions.params["model"] == "gpt-4o-mini"
        assert completions.params["messages"] == [{"role": "user", "content": "hi"}]
        assert completions.params["temperature"] == 0.1
        assert completions.params["max_tokens"] == 50
        assert completions.params["stream"] is True

    @pytest.mark.asyncio
    async def test_api_error_mapped(self):
        """Test that SDK errors surface as ModelTransportError while iterating."""
        error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.test"))
        stream = await provider_with(FakeCompletions(error=error)).chat_completion_stream(MESSAGES)

        with pytest.raises(ModelTransportError):
            await collect(stream)

    @pytest.mark.asyncio
    async def test_read_error_mid_stream_mapped(self):
        """Test that an httpx error while reading the body becomes ModelTransportError."""
        async def broken_body():
            yield delta_chunk(content="partial")
            raise httpx.ReadError("connection reset")

        completions = FakeCompletions()
        completions.create = _returning(completions, broken_body())
        stream = await provider_with(completions).chat_completion_stream(MESSAGES)

        seen = []
        with pytest.raises(ModelTransportError, match="connection reset"):
            async for chunk in stream:
                seen.append(chunk)

        assert seen == ["partial"]


class TestOpenAICompletion:
    """Tests for non-streaming completions."""

    @pytest.mark.asyncio
    async def test_reasoning_prepended(self):
        message = SimpleNamespace(content="42", reasoning_content="think first")
        completion = SimpleNamespace(
            model="deepseek-reasoner",
            usage=None,
            choices=[SimpleNamespace(message=message)],
        )
        response = await provider_with(FakeCompletions(completion=completion)).chat_completion(MESSAGES)

        assert response.content == "<think>think first</think>42"
        assert response.model == "deepseek-reasoner"

    @pytest.mark.asyncio
    async def test_api_error_mapped(self):
        error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.test"))

        with pytest.raises(ModelTransportError):
            await provider_with(FakeCompletions(error=error)).chat_completion(MESSAGES)


class TestDeepSeekProvider:
    """Tests for DeepSeek request shaping."""

    @pytest.mark.asyncio
    async def test_reasoner_drops_sampling_params(self):
        """Test that parameters the reasoner ignores are not sent."""
        completions = FakeCompletions(chunks=[])
        provider = DeepSeekProvider(api_key="test-key")
        provider._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))

        await collect(await provider.chat_completion_stream(MESSAGES, temperature=0.1, top_p=0.5))

        assert completions.params["model"] == "deepseek-reasoner"
        assert "temperature" not in completions.params
        assert "top_p" not in completions.params

    @pytest.mark.asyncio
    async def test_chat_model_keeps_sampling_params(self):
        completions = FakeCompletions(chunks=[])
        provider = DeepSeekProvider(api_key="test-key", model="deepseek-chat")
        provider._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))

        await collect(await provider.chat_completion_stream(MESSAGES, temperature=0.1))

        assert completions.params["temperature"] == 0.1


class TestReasoningFolder:
    """Tests for folding reasoning deltas into markup."""

    def test_alternating_runs(self):
        folder = ReasoningFolder()
        parts = [
            *folder.feed("a", None),
            *folder.feed(None, "b"),
            *folder.feed("c", None),
            *folder.finish(),
        ]

        assert "".join(parts) == "<think>a</think>b<think>c</think>"

    def test_empty_deltas_yield_nothing(self):
        folder = ReasoningFolder()

        assert list(folder.feed(None, None)) == []
        assert list(folder.feed("", "")) == []
        assert list(folder.finish()) == []


class TestStreamingResponse:
    """Tests for the stream wrapper."""

    @pytest.mark.asyncio
    async def test_text_accumulates(self):
        stream = StreamingResponse(_iterate(["<think>", "x", "</think>", "y"]))

        seen = []
        async for _ in stream:
            seen.append(stream.text)

        assert seen == ["<think>", "<think>x", "<think>x</think>", "<think>x</think>y"]
        assert stream.done is True

    def test_not_done_before_iteration(self):
        stream = StreamingResponse(_iterate([]))

        assert stream.done is False
        assert stream.text == ""
        assert stream.usage is None


class TestLLMFactory:
    """Tests for create_llm_provider."""

    @pytest.mark.asyncio
    async def test_create_deepseek(self):
        provider = create_llm_provider("deepseek", api_key="test-key")

        assert isinstance(provider, DeepSeekProvider)
        assert provider.model == "deepseek-reasoner"
        await provider.close()

    @pytest.mark.asyncio
    async def test_create_openai_with_model(self):
        provider = create_llm_provider("OpenAI", api_key="test-key", model="gpt-4o")

        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"
        await provider.close()

    @pytest.mark.parametrize("name", ["openai", "deepseek"])
    def test_missing_api_key(self, name):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider(name)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("anthropic", api_key="test-key")


@pytest.mark.integration
class TestDeepSeekIntegration:
    """Live streaming test; needs DEEPSEEK_API_KEY."""

    @pytest.mark.asyncio
    async def test_stream_has_reasoning(self, api_keys):
        api_key = api_keys["deepseek"]
        if not api_key:
            pytest.skip("DEEPSEEK_API_KEY not set")

        async with DeepSeekProvider(api_key=api_key) as provider:
            stream = await provider.chat_completion_stream(
                [ChatMessage(role="user", content="What is 2 + 2? Answer with one number.")]
            )
            content = "".join(await collect(stream))

        assert content.startswith("<think>")
        assert "</think>" in content

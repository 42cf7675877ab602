from typing import Any

from ..models import ChatMessage
from .openai import OpenAIProvider

DEEPSEEK_BASE_URL = "https://api.deepseek.com"
REASONER_MODEL = "deepseek-reasoner"

# Sampling parameters the reasoner ignores
REASONER_IGNORED_PARAMS = ("temperature", "top_p", "presence_penalty", "frequency_penalty")


class DeepSeekProvider(OpenAIProvider):
    """DeepSeek through its OpenAI-compatible endpoint.

    `deepseek-reasoner` streams its chain of thought as `reasoning_content`
    deltas, which the base class re-emits between <think> markers.
    `deepseek-chat` answers without reasoning.
    """

    def __init__(
        self,
        api_key: str,
        model: str = REASONER_MODEL,
        base_url: str = DEEPSEEK_BASE_URL,
        **client_kwargs: Any
    ):
        super().__init__(api_key=api_key, model=model, base_url=base_url, **client_kwargs)

    def _request_params(
        self,
        messages: list[ChatMessage],
        model: str | None,
        temperature: float,
        max_tokens: int | None,
        **kwargs: Any
    ) -> dict[str, Any]:
        params = super()._request_params(messages, model, temperature, max_tokens, **kwargs)
        if params["model"] == REASONER_MODEL:
            for name in REASONER_IGNORED_PARAMS:
                params.pop(name, None)
        return params

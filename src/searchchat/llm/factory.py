from typing import Any

from .base import LLMProvider
from .providers import DeepSeekProvider, OpenAIProvider

# Both speak the OpenAI chat API; they differ in defaults and reasoning handling
PROVIDERS: dict[str, type[OpenAIProvider]] = {
    "deepseek": DeepSeekProvider,
    "openai": OpenAIProvider,
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create the model collaborator by name.

    Args:
        provider: Key of PROVIDERS, case-insensitive
        **config: Constructor arguments; `api_key` is required, `model` and
            `base_url` override the provider defaults

    Returns:
        Initialized provider

    Raises:
        ValueError: If the provider name is unknown
        TypeError: If `api_key` is missing

    Examples:
        >>> llm = create_llm_provider("deepseek", api_key="sk-...")
        >>> llm.model
        'deepseek-reasoner'
    """
    provider_cls = PROVIDERS.get(provider.lower())
    if provider_cls is None:
        supported = ", ".join(repr(name) for name in PROVIDERS)
        raise ValueError(f"Unsupported provider: {provider}. Supported providers: {supported}")
    if "api_key" not in config:
        raise TypeError(f"{provider_cls.__name__} requires 'api_key' in config")
    return provider_cls(**config)

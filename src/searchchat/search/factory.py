from typing import Any

from .base import SearchClient
from .client import HttpSearchClient


def create_search_client(kind: str = "http", **config: Any) -> SearchClient:
    """Create a search client instance.

    This factory function hides the instantiation logic for search collaborators.

    Args:
        kind: Client type (currently only 'http')
        **config: Client configuration
            For HTTP:
                - endpoint: str (required)
                - api_key: str | None
                - timeout: float (default: 30.0)

    Returns:
        Initialized search client

    Raises:
        ValueError: If the client type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_search_client(
        ...     "http",
        ...     endpoint="http://localhost:3000/api/exawebsearch"
        ... )
    """
    if kind.lower() == "http":
        if "endpoint" not in config:
            raise TypeError("HTTP search client requires 'endpoint' in config")
        return HttpSearchClient(**config)

    raise ValueError(f"Unsupported search client: {kind}. Supported clients: 'http'")

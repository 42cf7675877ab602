import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import DEFAULT_SEARCH_TIMEOUT
from ..errors import SearchResponseError, SearchTransportError
from .base import SearchClient
from .models import SearchRequest, SearchResponse, SearchResult

logger = logging.getLogger(__name__)


class HttpSearchClient(SearchClient):
    """Search collaborator reached with a JSON POST.

    Request body: {"query": str, "previousQueries": [str, ...]}
    Response body: {"results": [SearchResult, ...]}

    Hidden design decisions:
    - httpx client lifecycle and timeouts
    - Bearer-token authentication
    - Mapping HTTP and payload failures onto SearchError subclasses
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_SEARCH_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize the client.

        Args:
            endpoint: Absolute URL of the search route
            api_key: Optional bearer token
            timeout: Total request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient (e.g. transport)
        """
        self._endpoint = endpoint
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(timeout),
            **client_kwargs
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def search(self, request: SearchRequest) -> list[SearchResult]:
        try:
            response = await self._client.post(self._endpoint, json=request.to_payload())
        except httpx.HTTPError as e:
            logger.warning("Search request to %s failed: %s", self._endpoint, e)
            raise SearchTransportError(f"Search failed: {e}") from e

        if not response.is_success:
            logger.warning(
                "Search endpoint %s returned HTTP %d", self._endpoint, response.status_code
            )
            raise SearchTransportError(
                f"Search failed (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            payload = SearchResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.warning("Search endpoint %s returned an invalid payload: %s", self._endpoint, e)
            raise SearchResponseError("Search failed: unexpected response from search service") from e

        logger.debug("Search for %r returned %d results", request.query, len(payload.results))
        return payload.results

    async def close(self) -> None:
        await self._client.aclose()

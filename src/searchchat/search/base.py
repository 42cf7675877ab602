from abc import ABC, abstractmethod
from typing import Any

from .models import SearchRequest, SearchResult


class SearchClient(ABC):
    """Abstract base class for search collaborators.

    This module hides the design decision of where search results come from.

    Hidden design decisions:
    - Transport (HTTP endpoint, SDK, in-process fake)
    - Authentication
    - Payload validation
    """

    @abstractmethod
    async def search(self, request: SearchRequest) -> list[SearchResult]:
        """Run a web search.

        Args:
            request: Current query plus up to three previous queries

        Returns:
            Ordered list of results; may be empty

        Raises:
            SearchTransportError: On non-success status or network failure
            SearchResponseError: On a malformed payload
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any open connections."""

    async def __aenter__(self) -> "SearchClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

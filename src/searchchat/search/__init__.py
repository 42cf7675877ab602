from .base import SearchClient
from .client import HttpSearchClient
from .factory import create_search_client
from .models import SearchRequest, SearchResponse, SearchResult

__all__ = [
    "SearchClient",
    "HttpSearchClient",
    "create_search_client",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
]

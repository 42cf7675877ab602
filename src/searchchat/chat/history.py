from pydantic import BaseModel, ConfigDict, Field

from ..config import HISTORY_CAPACITY


class QueryHistory(BaseModel):
    """Rolling window of the most recent user queries.

    Immutable: `append` returns a new history. Holds at most
    HISTORY_CAPACITY entries, evicting the oldest first.
    """

    model_config = ConfigDict(frozen=True)

    queries: tuple[str, ...] = Field(default=(), description="Oldest first")

    def append(self, query: str) -> "QueryHistory":
        """Return a new history with `query` as the most recent entry."""
        return QueryHistory(queries=(*self.queries, query)[-HISTORY_CAPACITY:])

    def window(self) -> tuple[str, ...]:
        """Prior queries to send along with the next search."""
        return self.queries[-HISTORY_CAPACITY:]

    def __len__(self) -> int:
        return len(self.queries)

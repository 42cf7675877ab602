"""Exception hierarchy for searchchat.

Every error is scoped to a single chat turn; none of them is fatal to the
process. Search errors are caught by the orchestrator and surfaced as a
failed turn, model errors leave the partial assistant message in place.
"""


class SearchChatError(Exception):
    """Base class for all searchchat errors."""


class SearchError(SearchChatError):
    """The search collaborator could not produce results."""


class SearchTransportError(SearchError):
    """Non-success HTTP status or network failure while searching."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SearchResponseError(SearchError):
    """The search collaborator answered with a malformed payload."""


class ModelTransportError(SearchChatError):
    """The model stream failed before completion."""


class TurnInProgressError(SearchChatError):
    """A second turn was submitted while one is still outstanding."""

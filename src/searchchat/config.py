"""Protocol constants and logging setup.

Centralizes the values shared by the chat core, the providers and the UI:
- Reasoning markers emitted by thinking models
- Query history capacity
- Search context header and citation instruction
"""

import logging

from rich.logging import RichHandler

# Reasoning markers
THINK_START = "<think>"
THINK_END = "</think>"

# Number of prior queries sent to the search collaborator
HISTORY_CAPACITY = 3

# Search context layout
SEARCH_CONTEXT_HEADER = "Web Search Results:"
SEARCH_RESULT_SEPARATOR = "---"
SEARCH_CONTEXT_INSTRUCTIONS = (
    "Instructions: Based on the above search results, please provide an answer "
    "to the user's query. When referencing information, cite the source number "
    "in brackets like [1], [2], etc. Use simple english. Use simple words."
)

# HTTP defaults
DEFAULT_SEARCH_ENDPOINT = "http://localhost:3000/api/exawebsearch"
DEFAULT_SEARCH_TIMEOUT = 30.0

LOGGER_NAME = "searchchat"


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Args:
        level: Level name ("debug", "info", ...) or numeric level

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger

"""Provider factory functions for CLI.

Centralizes creation of the model and search collaborators from environment
variables. Hides configuration details from command implementations.
"""

import os

import typer
from rich.console import Console

from ..config import DEFAULT_SEARCH_ENDPOINT, DEFAULT_SEARCH_TIMEOUT
from ..llm import LLMProvider, create_llm_provider
from ..search import SearchClient, create_search_client

# Default console for output
_console = Console()


def get_search_client(console: Console | None = None) -> SearchClient:
    """Create the search collaborator client from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        HTTP search client

    Raises:
        SystemExit: If SEARCH_TIMEOUT is not a number

    Environment variables:
        SEARCH_ENDPOINT: Search route URL (default: http://localhost:3000/api/exawebsearch)
        SEARCH_API_KEY: Optional bearer token
        SEARCH_TIMEOUT: Request timeout in seconds (default: 30)
    """
    con = console or _console
    raw_timeout = os.getenv("SEARCH_TIMEOUT", str(DEFAULT_SEARCH_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        con.print(f"[red]Error: SEARCH_TIMEOUT must be a number, got {raw_timeout!r}[/red]")
        raise typer.Exit(code=1) from None

    return create_search_client(
        "http",
        endpoint=os.getenv("SEARCH_ENDPOINT", DEFAULT_SEARCH_ENDPOINT),
        api_key=os.getenv("SEARCH_API_KEY") or None,
        timeout=timeout,
    )


def get_llm(console: Console | None = None) -> LLMProvider | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (openai, deepseek; default: deepseek)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
        OPENAI_BASE_URL: Optional OpenAI-compatible server URL
        DEEPSEEK_API_KEY: DeepSeek API key (for deepseek provider)
        DEEPSEEK_MODEL: DeepSeek model (default: deepseek-reasoner)
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "deepseek").lower()

    if llm_provider == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: OPENAI_API_KEY not set, chat disabled[/yellow]")
            return None
        return create_llm_provider(
            "openai",
            api_key=api_key,
            model=os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini"),
            base_url=os.getenv("OPENAI_BASE_URL") or None,
        )

    elif llm_provider == "deepseek":
        api_key = os.getenv("DEEPSEEK_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: DEEPSEEK_API_KEY not set, chat disabled[/yellow]")
            return None
        return create_llm_provider(
            "deepseek",
            api_key=api_key,
            model=os.getenv("DEEPSEEK_MODEL", "deepseek-reasoner"),
        )

    else:
        con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
        return None


def require_llm(console: Console | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        SystemExit: If LLM provider is not configured
    """
    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm

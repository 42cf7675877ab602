"""Main CLI application using Typer."""
import asyncio
import os

import typer
from dotenv import load_dotenv
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from ..chat import AugmentationOrchestrator, TurnOutcome
from ..config import configure_logging
from ..errors import SearchError
from ..llm import LLMProvider
from ..search import SearchClient, SearchRequest
from ..ui.config import STREAM_REFRESH_PER_SECOND, SUBMIT_BUSY_LABEL
from ..ui.transcript import render_error, render_transcript
from .providers import get_search_client, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="searchchat",
    help="Chat with a language model grounded in live web search results",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    "-l",
    help="Log level: debug, info, warning or error (default: $SEARCHCHAT_LOG_LEVEL or warning)"
)


def _setup_logging(log_level: str | None) -> None:
    configure_logging(log_level or os.getenv("SEARCHCHAT_LOG_LEVEL", "WARNING"))


class LiveTurnView:
    """Repaints the current turn in a rich Live display.

    Only messages appended since `begin` are painted, so earlier turns stay
    in the scrollback exactly as they were printed.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._live: Live | None = None
        self._turn_start = 0
        self.orchestrator: AugmentationOrchestrator | None = None

    def begin(self) -> None:
        self._turn_start = len(self.orchestrator.store)
        self._live = Live(
            console=self._console,
            refresh_per_second=STREAM_REFRESH_PER_SECOND,
        )
        self._live.start()
        self.paint()

    def paint(self) -> None:
        if self._live is None or self.orchestrator is None:
            return
        orchestrator = self.orchestrator
        parts = []
        messages = orchestrator.store.messages()[self._turn_start:]
        parts.append(render_transcript(messages, orchestrator.results_for, orchestrator.error))
        if orchestrator.is_loading:
            parts.append(Spinner("dots", text=SUBMIT_BUSY_LABEL))
        if orchestrator.model_error:
            parts.append(render_error(f"Model error: {orchestrator.model_error}"))
        self._live.update(Group(*parts))

    def end(self) -> None:
        self.paint()
        if self._live is not None:
            self._live.stop()
            self._live = None


def _build_orchestrator(
    llm: LLMProvider,
    search_client: SearchClient,
    view: LiveTurnView,
) -> AugmentationOrchestrator:
    orchestrator = AugmentationOrchestrator(
        search_client=search_client,
        llm=llm,
        on_update=lambda message, segmented: view.paint(),
        on_change=lambda _: view.paint(),
    )
    view.orchestrator = orchestrator
    return orchestrator


async def _run_turn(
    orchestrator: AugmentationOrchestrator,
    view: LiveTurnView,
    user_input: str,
    show_context: bool,
) -> TurnOutcome:
    view.begin()
    try:
        outcome = await orchestrator.submit(user_input)
    finally:
        view.end()

    if show_context and outcome.system_message is not None:
        console.print(Panel(
            outcome.system_message.content,
            title="Injected search context",
            border_style="dim",
        ))
    if outcome.usage is not None:
        console.print(
            f"[dim]Tokens: {outcome.usage.prompt_tokens:,} in / "
            f"{outcome.usage.completion_tokens:,} out[/dim]"
        )
    return outcome


@app.command()
def ask(
    query: str = typer.Argument(..., help="Question to answer"),
    show_context: bool = typer.Option(
        False,
        "--show-context",
        "-c",
        help="Print the search context injected as a system message"
    ),
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """Answer a single question using web search results."""
    _setup_logging(log_level)

    async def _ask():
        llm = require_llm(console)
        search_client = get_search_client(console)
        view = LiveTurnView(console)
        orchestrator = _build_orchestrator(llm, search_client, view)

        try:
            outcome = await _run_turn(orchestrator, view, query, show_context)
            if outcome.error or outcome.model_error:
                raise typer.Exit(code=1)
        finally:
            await search_client.close()
            await llm.close()

    asyncio.run(_ask())


@app.command()
def chat(
    show_context: bool = typer.Option(
        False,
        "--show-context",
        "-c",
        help="Print the search context injected as a system message"
    ),
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """Interactive search-augmented chat in the terminal."""
    _setup_logging(log_level)

    async def _chat():
        llm = require_llm(console)
        search_client = get_search_client(console)
        view = LiveTurnView(console)
        orchestrator = _build_orchestrator(llm, search_client, view)

        console.print("[bold cyan]searchchat[/bold cyan]")
        console.print(f"[dim]Model: {llm.model}[/dim]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")

                    if not user_input.strip():
                        continue

                    if user_input.strip().lower() in ('exit', 'quit', 'q'):
                        console.print("[dim]Goodbye![/dim]")
                        break

                    await _run_turn(orchestrator, view, user_input, show_context)
                    console.print()

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
        finally:
            await search_client.close()
            await llm.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        llm = require_llm(console)
        search_client = get_search_client(console)

        try:
            await run_textual_tui(
                llm=llm,
                search_client=search_client,
                log_level=log_level,
            )
        finally:
            await search_client.close()
            await llm.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """Run only the web search and list the numbered results."""
    _setup_logging(log_level)

    async def _search():
        search_client = get_search_client(console)
        try:
            results = await search_client.search(SearchRequest(query=query))
        except SearchError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1) from None
        finally:
            await search_client.close()

        if not results:
            console.print("[yellow]No results found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Ref", style="dim", width=5)
        table.add_column("Title", style="cyan")
        table.add_column("URL")
        table.add_column("Date", style="green", width=12)

        for i, result in enumerate(results, 1):
            table.add_row(
                Text(f"[{i}]"), Text(result.title), Text(result.url), result.published_date or ""
            )

        console.print(table)

    asyncio.run(_search())


@app.command()
def health():
    """Check configuration and search endpoint reachability."""
    async def _health():
        all_healthy = True

        search_client = get_search_client(console)
        try:
            await search_client.search(SearchRequest(query="health check"))
            console.print("[green]+[/green] Search endpoint: OK")
        except SearchError as e:
            console.print(f"[red]x[/red] Search endpoint: FAILED ({e})")
            all_healthy = False
        finally:
            await search_client.close()

        provider = os.getenv("LLM_PROVIDER", "deepseek").lower()
        console.print(f"[dim]LLM provider: {provider}[/dim]")
        for name in ("OPENAI_API_KEY", "DEEPSEEK_API_KEY"):
            if os.getenv(name):
                console.print(f"[green]+[/green] {name}: SET")
            else:
                console.print(f"[yellow]![/yellow] {name}: NOT SET")

        if not all_healthy:
            raise typer.Exit(code=1)

    asyncio.run(_health())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

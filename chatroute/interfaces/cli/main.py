"""
CLI Main - Typer-based command-line interface.

Usage:
    chatroute search "breaking news today" --tz Europe/Moscow
    chatroute classify "what is the capital of France"
    chatroute chat
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from chatroute.config import ChatRouteError

if TYPE_CHECKING:
    from chatroute.domains.orchestration import AssistantService

app = typer.Typer(
    name="chatroute",
    help="ChatRoute - Search-routing chat assistant core",
    add_completion=False,
)
console = Console()


class TierOption(str, Enum):
    AUTO = "auto"
    BASIC = "basic"
    ADVANCED = "advanced"


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Configure logging for every command."""
    from chatroute.config import get_settings

    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def classify(query: str = typer.Argument(..., help="Query to classify")) -> None:
    """Show which search tier a query would use."""
    from chatroute.domains.search import SearchClassifier

    classifier = SearchClassifier()
    result = classifier.classify(query)

    table = Table(title="Search Classification")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Tier", result.tier.value.upper())
    table.add_row("Confidence", f"{result.confidence:.0%}")
    table.add_row("Reasoning", result.reasoning)
    table.add_row("Search advised", "yes" if classifier.is_search_needed(query) else "no")
    console.print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    tz: str | None = typer.Option(None, "--tz", help="IANA timezone, e.g. Europe/Moscow"),
    tier: TierOption = typer.Option(TierOption.AUTO, "--tier", "-t", help="Force a tier"),
) -> None:
    """Run one web search through the router."""
    asyncio.run(_search_async(query, tz, tier))


async def _search_async(query: str, tz: str | None, tier: TierOption) -> None:
    """Async search implementation."""
    from chatroute.config import get_settings
    from chatroute.domains.search import build_search_router

    try:
        router = build_search_router(get_settings())
    except ChatRouteError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    runners = {
        TierOption.AUTO: router.search,
        TierOption.BASIC: router.basic_search,
        TierOption.ADVANCED: router.advanced_search,
    }

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Searching...", total=None)
        result = await runners[tier](query, tz)

    console.print(
        Panel(
            result.result_text,
            title=f"[bold]{result.query}[/bold]",
            subtitle=result.produced_at.strftime("%Y-%m-%d %H:%M:%S %Z"),
        )
    )


@app.command()
def chat(
    tz: str | None = typer.Option(None, "--tz", help="IANA timezone for date context"),
    conversation: str = typer.Option("cli", "--conversation", "-c", help="Conversation id"),
) -> None:
    """Interactive chat loop (/stats, /clear, /clearcache, /tz NAME, /quit)."""
    asyncio.run(_chat_async(tz, conversation))


async def _chat_async(tz: str | None, conversation: str) -> None:
    """Async chat loop."""
    from chatroute.domains.orchestration import build_assistant

    participant = "cli-user"
    try:
        assistant = build_assistant()
    except ChatRouteError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    if tz and not assistant.set_timezone(participant, tz):
        console.print(f"[yellow]Unknown timezone {tz}, using UTC[/yellow]")

    console.print(Panel("Type a message, or /quit to exit.", title="ChatRoute"))

    while True:
        text = (await asyncio.to_thread(console.input, "[bold cyan]you>[/bold cyan] ")).strip()
        if not text:
            continue
        if text in ("/quit", "/exit"):
            break
        if text == "/stats":
            _print_stats(assistant)
            continue
        if text == "/clear":
            assistant.clear_history(conversation)
            console.print("[green]History cleared[/green]")
            continue
        if text == "/clearcache":
            removed = await assistant.clean_cache()
            console.print(f"[green]Search cache cleaned:[/green] {removed} expired entries removed")
            continue
        if text.startswith("/tz "):
            name = text[4:].strip()
            ok = assistant.set_timezone(participant, name)
            console.print(f"[green]Timezone set to {name}[/green]" if ok else "[red]Invalid timezone[/red]")
            continue

        try:
            response = await assistant.handle_text(conversation, participant, text)
        except ChatRouteError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            continue

        footer = f"steps: {response.step_count}"
        if response.used_web_search:
            footer += " | web search"
        console.print(Panel(response.text, title="assistant", subtitle=footer))


def _print_stats(assistant: AssistantService) -> None:
    """Render cache and history diagnostics."""
    cache = assistant.cache_stats()
    history = assistant.history_stats()

    table = Table(title="Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Search cache entries", str(cache.total_entries))
    table.add_row("Valid cache entries", str(cache.valid_entries))
    table.add_row("Conversations", str(history.total_conversations))
    table.add_row("Messages", str(history.total_messages))
    table.add_row("Media messages", str(history.media_message_count))
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from chatroute import __version__

    console.print(f"ChatRoute v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()

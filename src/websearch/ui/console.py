"""Rich console output for the websearch CLI."""

from __future__ import annotations

from typing import Iterable

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from websearch.engines import EngineDefinition, FILTERS


def _filter_label(engine: EngineDefinition) -> str:
    """Name of an engine's filter as it would be written in config."""
    if engine.text_filter is None:
        return ""
    for name, func in FILTERS.items():
        if func is engine.text_filter:
            return name
    module = getattr(engine.text_filter, "__module__", "")
    qualname = getattr(engine.text_filter, "__qualname__", repr(engine.text_filter))
    return f"{module}:{qualname}" if module else qualname


class Console:
    """Handles all terminal output with Rich formatting."""

    def __init__(self, console: RichConsole | None = None):
        self._console = console or RichConsole()

    def print_welcome(self, engine_count: int):
        self._console.print()
        self._console.print(
            Panel(
                f"[bold]websearch[/bold] - search the web from your terminal\n"
                f"Engines: [cyan]{engine_count}[/cyan]\n"
                f"Type text to search, [bold]/help[/bold] for commands, "
                f"[bold]/quit[/bold] to exit",
                border_style="blue",
            )
        )
        self._console.print()

    def print_engines(self, engines: Iterable[EngineDefinition]):
        table = Table(border_style="dim", header_style="bold")
        table.add_column("id", style="cyan", no_wrap=True)
        table.add_column("title")
        table.add_column("url template", style="dim", overflow="fold")
        table.add_column("filter", style="magenta")
        for engine in sorted(engines, key=lambda e: e.title):
            table.add_row(engine.id, engine.title, engine.url_template, _filter_label(engine))
        self._console.print(table)

    def print_url(self, url: str):
        self._console.print(url, markup=False, highlight=False, soft_wrap=True)

    def print_info(self, message: str):
        self._console.print(f"[dim]{message}[/dim]")

    def print_error(self, message: str):
        self._console.print(f"[red]Error:[/red] {message}", highlight=False)

    def print_help(self, command_names: Iterable[str]):
        names = list(command_names)
        lines = [
            "Commands:",
            "  <text>                    - Pick an engine and search for <text>",
            "  /search-<id> [text]       - Search with one engine",
            "  /engines                  - List engines",
            "  /add <id> <url> <title>   - Add or replace an engine",
            "  /delete <id>              - Remove an engine",
            "  /config                   - Show config file path",
            "  /quit, /exit, /q          - Exit",
            "  /help                     - Show this help",
        ]
        if names:
            lines.append("")
            lines.append("Engine commands: " + ", ".join(f"/{n}" for n in names))
        self._console.print("\n".join(lines), markup=False, highlight=False)

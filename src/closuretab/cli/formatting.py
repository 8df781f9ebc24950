"""Rich formatting helpers for the closuretab CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from closuretab.models.node import Node


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_nodes(nodes: list[Node], console: Console, *, title: str) -> None:
    """Display closure rows as a compact table."""
    if not nodes:
        console.print(f"[dim]No {title}.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Node", style="yellow", justify="right")
    table.add_column("Relative", style="cyan", justify="right")
    table.add_column("Depth", style="green", justify="right")

    for node in nodes:
        table.add_row(str(node.id), str(node.parent_id), str(node.depth))

    console.print(table)


def format_success(message: str, console: Console) -> None:
    """Display a success message."""
    console.print(f"[green]{escape(message)}[/green]", highlight=False, soft_wrap=True)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True)

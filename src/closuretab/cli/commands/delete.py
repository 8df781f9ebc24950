"""closuretab delete -- remove a node and its subtree."""

from __future__ import annotations

import click

from closuretab.cli.formatting import format_success


@click.command()
@click.argument("node_id", type=int)
@click.pass_context
def delete(ctx: click.Context, node_id: int) -> None:
    """Delete NODE_ID and everything beneath it."""
    from closuretab.cli import _tree_session

    with _tree_session(ctx) as (tree, console):
        rows = tree.delete(node_id)
        if rows == 0:
            console.print(f"[dim]Node {node_id} not found; nothing deleted.[/dim]")
        else:
            format_success(f"Deleted subtree of node {node_id} ({rows} rows).", console)

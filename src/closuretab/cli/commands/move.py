"""closuretab move -- re-parent a subtree."""

from __future__ import annotations

import click

from closuretab.cli.formatting import format_success


@click.command()
@click.argument("node_id", type=int)
@click.argument("new_parent_id", type=int)
@click.pass_context
def move(ctx: click.Context, node_id: int, new_parent_id: int) -> None:
    """Move the subtree rooted at NODE_ID under NEW_PARENT_ID."""
    from closuretab.cli import _tree_session

    with _tree_session(ctx) as (tree, console):
        rows = tree.move(node_id, new_parent_id)
        format_success(f"Moved node {node_id} under {new_parent_id} ({rows} links).", console)

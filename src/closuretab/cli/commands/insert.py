"""closuretab insert -- add a node under a parent."""

from __future__ import annotations

import click

from closuretab.cli.formatting import format_success


@click.command()
@click.argument("parent_id", type=int)
@click.argument("node_id", type=int)
@click.pass_context
def insert(ctx: click.Context, parent_id: int, node_id: int) -> None:
    """Insert NODE_ID as a child of PARENT_ID.

    Pass the same id twice to create a root.
    """
    from closuretab.cli import _tree_session

    with _tree_session(ctx) as (tree, console):
        rows = tree.insert(parent_id, node_id)
        format_success(f"Inserted node {node_id} under {parent_id} ({rows} rows).", console)

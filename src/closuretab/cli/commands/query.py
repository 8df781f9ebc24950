"""closuretab descendants / ancestors / empty -- read-only queries."""

from __future__ import annotations

import click

from closuretab.cli.formatting import format_nodes


@click.command()
@click.argument("node_id", type=int)
@click.pass_context
def descendants(ctx: click.Context, node_id: int) -> None:
    """Show NODE_ID and its descendants, shallowest first."""
    from closuretab.cli import _tree_session

    with _tree_session(ctx) as (tree, console):
        format_nodes(tree.descendants(node_id), console, title="descendants")


@click.command()
@click.argument("node_id", type=int)
@click.pass_context
def ancestors(ctx: click.Context, node_id: int) -> None:
    """Show the ancestors of NODE_ID, root first."""
    from closuretab.cli import _tree_session

    with _tree_session(ctx) as (tree, console):
        format_nodes(tree.ancestors(node_id), console, title="ancestors")


@click.command()
@click.pass_context
def empty(ctx: click.Context) -> None:
    """Report whether the closure table holds any rows."""
    from closuretab.cli import _tree_session

    with _tree_session(ctx) as (tree, console):
        if tree.empty():
            console.print("empty")
        else:
            console.print(f"{tree.count()} rows")

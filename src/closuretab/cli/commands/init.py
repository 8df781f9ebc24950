"""closuretab init -- create the closure table."""

from __future__ import annotations

import click

from closuretab.cli.formatting import format_success


@click.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create the closure table if it does not exist."""
    from closuretab.cli import _tree_session

    with _tree_session(ctx, create=True) as (tree, console):
        format_success(f"Closure table '{tree.config.table_name}' ready.", console)

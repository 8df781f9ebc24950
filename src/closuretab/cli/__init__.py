"""closuretab CLI -- terminal interface for a closure table.

This module is NEVER imported from closuretab/__init__.py.
It is only loaded via the ``closuretab`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install closuretab[cli]"
    ) from None

from closuretab.cli.formatting import format_error, get_console

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from closuretab.models.config import ClosureConfig
    from closuretab.tree import ClosureTree


@click.group()
@click.option(
    "--db",
    default=".closuretab.db",
    envvar="CLOSURETAB_DB",
    help="Path to the SQLite database.",
)
@click.option(
    "--url",
    default=None,
    envvar="CLOSURETAB_URL",
    help="SQLAlchemy database URL (overrides --db).",
)
@click.option("--table", default="closure", envvar="CLOSURETAB_TABLE", help="Closure table name.")
@click.option("--child-column", default="id", envvar="CLOSURETAB_CHILD_COLUMN", help="Child (descendant) column.")
@click.option("--parent-column", default="parent_id", envvar="CLOSURETAB_PARENT_COLUMN", help="Parent (ancestor) column.")
@click.option("--depth-column", default="depth", envvar="CLOSURETAB_DEPTH_COLUMN", help="Depth column.")
@click.pass_context
def cli(
    ctx: click.Context,
    db: str,
    url: str | None,
    table: str,
    child_column: str,
    parent_column: str,
    depth_column: str,
) -> None:
    """closuretab: maintain a closure table of trees."""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db
    ctx.obj["url"] = url
    ctx.obj["table"] = table
    ctx.obj["columns"] = {
        "child": child_column,
        "parent": parent_column,
        "depth": depth_column,
    }


def _get_config(ctx: click.Context) -> "ClosureConfig":
    """Build the closure config from Click context."""
    from closuretab.models.config import ClosureConfig

    return ClosureConfig.from_mapping(ctx.obj["table"], ctx.obj["columns"])


def _get_tree(ctx: click.Context, *, create: bool = False) -> "ClosureTree":
    """Open a ClosureTree from Click context.

    Refuses to invent a new SQLite file unless *create* is set.
    """
    import os

    from closuretab.exceptions import ClosureTableError
    from closuretab.tree import ClosureTree

    db_path = ctx.obj["db_path"]
    url = ctx.obj["url"]
    if url is None and not create and not os.path.exists(db_path):
        raise ClosureTableError(
            f"Database not found: {db_path}. Run 'closuretab init' first."
        )
    return ClosureTree.open(db_path, url=url, config=_get_config(ctx), create=create)


@contextmanager
def _tree_session(
    ctx: click.Context, *, create: bool = False
) -> Iterator[tuple[ClosureTree, Console]]:
    """Open a ClosureTree, yield (tree, console), and close it on exit.

    Any exception is printed as a CLI error and turned into exit code 1.
    """
    console = get_console()
    try:
        tree = _get_tree(ctx, create=create)
        try:
            yield tree, console
        finally:
            tree.close()
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from closuretab.cli.commands.init import init  # noqa: E402
from closuretab.cli.commands.insert import insert  # noqa: E402
from closuretab.cli.commands.delete import delete  # noqa: E402
from closuretab.cli.commands.move import move  # noqa: E402
from closuretab.cli.commands.query import ancestors, descendants, empty  # noqa: E402

cli.add_command(init)
cli.add_command(insert)
cli.add_command(delete)
cli.add_command(move)
cli.add_command(descendants)
cli.add_command(ancestors)
cli.add_command(empty)

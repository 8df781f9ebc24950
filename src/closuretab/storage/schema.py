"""SQLAlchemy table definition for a closure table.

The closure core does not own its schema; this module exists so tests,
the CLI, and ClosureTree can create a table matching a ClosureConfig.
No uniqueness constraint is declared: duplicate prevention is left to
whoever owns the schema.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table

from closuretab.models.config import ClosureConfig


def build_closure_table(config: ClosureConfig, metadata: MetaData | None = None) -> Table:
    """Declare the closure table described by *config* on *metadata*."""
    metadata = metadata if metadata is not None else MetaData()
    cols = config.columns
    name = config.table_name
    return Table(
        name,
        metadata,
        Column(cols.child, Integer, nullable=False),
        Column(cols.parent, Integer, nullable=False),
        Column(cols.depth, Integer, nullable=False),
        Index(f"ix_{name}_{cols.child}", cols.child),
        Index(f"ix_{name}_{cols.parent}_{cols.depth}", cols.parent, cols.depth),
    )

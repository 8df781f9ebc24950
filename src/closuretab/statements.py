"""Statement builder for closure table operations.

Turns a ClosureConfig into SQLAlchemy Core statements. Table and column
names are placed structurally; every node id or depth is a bound
parameter. Nothing here touches a database.

Subqueries against the closure table go through named aliases so that
SQLAlchemy never auto-correlates them with the outer DELETE/INSERT target.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import (
    ColumnElement,
    Delete,
    Insert,
    Integer,
    Select,
    column,
    delete,
    func,
    insert,
    literal,
    or_,
    select,
    table,
    true,
)
from sqlalchemy.sql.expression import Alias, TableClause

from closuretab.models.config import ClosureConfig, ColumnRole


class ClosureStatements:
    """Builds every statement a ClosureRelation issues."""

    def __init__(self, config: ClosureConfig) -> None:
        cols = config.columns
        self._child = cols.name_for(ColumnRole.CHILD)
        self._parent = cols.name_for(ColumnRole.PARENT)
        self._depth = cols.name_for(ColumnRole.DEPTH)
        self._table: TableClause = table(
            config.table_name,
            *(column(name, Integer) for name in self._target_columns()),
        )

    @property
    def table(self) -> TableClause:
        return self._table

    def _alias(self, name: str) -> Alias:
        return self._table.alias(name)

    def _target_columns(self) -> list[str]:
        return [self._child, self._parent, self._depth]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def descendants(self, root_id: int) -> Select:
        """Rows whose parent is *root_id*, shallowest first."""
        t = self._table
        return (
            select(t.c[self._child], t.c[self._parent], t.c[self._depth])
            .where(t.c[self._parent] == root_id)
            .order_by(t.c[self._depth].asc())
        )

    def ancestors(self, node_id: int) -> Select:
        """Strict ancestors of *node_id*, farthest first.

        The ancestor id fills both the id and parent slots of each row.
        """
        t = self._table
        return (
            select(
                t.c[self._parent].label("node_id"),
                t.c[self._parent].label("ancestor_id"),
                t.c[self._depth],
            )
            .where(t.c[self._child] == node_id, t.c[self._parent] != node_id)
            .order_by(t.c[self._depth].desc())
        )

    def count(self) -> Select:
        return select(func.count()).select_from(self._table)

    # ------------------------------------------------------------------
    # Insert
    # ------------------------------------------------------------------

    def insert_ancestor_links(self, parent_id: int, node_id: int) -> Insert:
        """Copy every ancestor row of *parent_id* onto *node_id*, one level deeper."""
        src = self._alias("ancestry")
        rows = select(
            literal(node_id, Integer),
            src.c[self._parent],
            src.c[self._depth] + 1,
        ).where(src.c[self._child] == parent_id)
        return insert(self._table).from_select(self._target_columns(), rows)

    def insert_self(self, node_id: int) -> Insert:
        return insert(self._table).values(
            {self._child: node_id, self._parent: node_id, self._depth: 0}
        )

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def _in_subtree(self, node_id: int) -> ColumnElement[bool]:
        sub = self._alias("subtree")
        return self._table.c[self._child].in_(
            select(sub.c[self._child]).where(sub.c[self._parent] == node_id)
        )

    def delete_subtree(self, node_id: int) -> Delete:
        """Remove every row whose child lies in the subtree of *node_id*."""
        return delete(self._table).where(self._in_subtree(node_id))

    def delete_remaining(self, node_id: int) -> Delete:
        """Remove any row left that still names *node_id* on either side."""
        t = self._table
        return delete(t).where(
            or_(t.c[self._child] == node_id, t.c[self._parent] == node_id)
        )

    # ------------------------------------------------------------------
    # Move
    # ------------------------------------------------------------------

    def detach(self, node_id: int) -> Delete:
        """Cut the links between the subtree of *node_id* and its old ancestors.

        Rows between two members of the subtree are left alone.
        """
        anc = self._alias("ancestry")
        strict_ancestors = select(anc.c[self._parent]).where(
            anc.c[self._child] == node_id,
            anc.c[self._parent] != anc.c[self._child],
        )
        return delete(self._table).where(
            self._in_subtree(node_id),
            self._table.c[self._parent].in_(strict_ancestors),
        )

    def reattach(
        self,
        node_id: int,
        new_parent_id: int,
        ancestor_ids: Sequence[int],
        subtree_ids: Sequence[int],
    ) -> Insert:
        """Link every subtree member to every new ancestor.

        Depth is ``supertree.depth + subtree.depth + 1``: the distance from
        the ancestor down to the new parent, the new edge, and the distance
        from the moved root down to the member. In a forest each pair has a
        single path, so MAX only collapses identical values.
        """
        sup = self._alias("supertree")
        sub = self._alias("subtree")
        rows = (
            select(
                sub.c[self._child],
                sup.c[self._parent],
                func.max(sup.c[self._depth] + sub.c[self._depth] + 1),
            )
            .select_from(sup.join(sub, true()))
            .where(
                sup.c[self._child] == new_parent_id,
                sup.c[self._parent].in_(list(ancestor_ids)),
                sub.c[self._parent] == node_id,
                sub.c[self._child].in_(list(subtree_ids)),
            )
            .group_by(sup.c[self._parent], sub.c[self._child])
        )
        return insert(self._table).from_select(self._target_columns(), rows)

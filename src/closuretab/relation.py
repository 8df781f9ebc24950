"""Closure table relation manager.

ClosureRelation owns the table/column binding and implements the five
operations that read and rewrite a closure table: descendants, ancestors,
insert, delete, and move, plus the empty/count probes.

Every operation issues its statements one after another on a
caller-supplied Executor (a SQLAlchemy Connection or Session). The
relation never begins, commits, or rolls back a transaction: callers that
need a multi-statement mutation to be all-or-nothing must run it inside
their own transaction. A failure mid-operation leaves whatever statements
already ran in place.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from closuretab.codec import node_ids, scan_count, scan_nodes
from closuretab.exceptions import ExecutionError, IllegalMoveError
from closuretab.models.config import ClosureConfig, ColumnRole
from closuretab.statements import ClosureStatements

if TYPE_CHECKING:
    from sqlalchemy import Executable, Result

    from closuretab.models.node import Node
    from closuretab.protocols import Executor

logger = logging.getLogger(__name__)


def _affected(*results: Result[Any]) -> int:
    """Sum driver row counts; -1 if any driver could not report one."""
    counts = [r.rowcount for r in results]  # type: ignore[attr-defined]
    if any(c < 0 for c in counts):
        return -1
    return sum(counts)


class ClosureRelation:
    """Reads and maintains one closure table.

    Stateless between calls: all state lives in the table.

    Example::

        rel = ClosureRelation.bind(
            "closure", {"child": "id", "parent": "parent_id", "depth": "depth"}
        )
        with engine.begin() as conn:
            rel.insert(conn, 0, 0)
            rel.insert(conn, 0, 1)
            rel.get_descendants(conn, 0)
    """

    def __init__(self, config: ClosureConfig) -> None:
        self._config = config
        self._statements = ClosureStatements(config)

    @classmethod
    def bind(
        cls, table_name: str, columns: Mapping[ColumnRole | str, str]
    ) -> ClosureRelation:
        """Bind to *table_name* with a role -> column mapping.

        Raises:
            ConfigurationError: If the mapping is missing a role or invalid.
        """
        return cls(ClosureConfig.from_mapping(table_name, columns))

    @property
    def config(self) -> ClosureConfig:
        return self._config

    @property
    def statements(self) -> ClosureStatements:
        return self._statements

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    def _execute(
        self,
        executor: Executor,
        statement: Executable,
        *,
        operation: str,
        node_id: int | None,
        step: str,
        execution_options: Mapping[str, Any] | None,
    ) -> Result[Any]:
        try:
            return executor.execute(
                statement, execution_options=dict(execution_options or {})
            )
        except SQLAlchemyError as exc:
            raise ExecutionError(operation, node_id, step, exc) from exc

    def _read_nodes(
        self,
        executor: Executor,
        statement: Executable,
        *,
        operation: str,
        node_id: int,
        step: str,
        execution_options: Mapping[str, Any] | None,
    ) -> list[Node]:
        result = self._execute(
            executor,
            statement,
            operation=operation,
            node_id=node_id,
            step=step,
            execution_options=execution_options,
        )
        try:
            return scan_nodes(result, operation=operation, node_id=node_id)
        except SQLAlchemyError as exc:
            raise ExecutionError(operation, node_id, step, exc) from exc
        finally:
            result.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_descendants(
        self,
        executor: Executor,
        root_id: int,
        *,
        execution_options: Mapping[str, Any] | None = None,
    ) -> list[Node]:
        """Return *root_id* and all its descendants, shallowest first.

        The first entry is the self row ``Node(root_id, root_id, 0)`` when
        the node exists. Order among equal depths is unspecified.
        """
        return self._read_nodes(
            executor,
            self._statements.descendants(root_id),
            operation="get_descendants",
            node_id=root_id,
            step="select descendants",
            execution_options=execution_options,
        )

    def get_ancestors(
        self,
        executor: Executor,
        node_id: int,
        *,
        execution_options: Mapping[str, Any] | None = None,
    ) -> list[Node]:
        """Return the strict ancestors of *node_id*, farthest first.

        Each Node carries the ancestor's id in both ``id`` and
        ``parent_id``; ``depth`` is its distance from *node_id*. A root
        node yields an empty list.
        """
        return self._read_nodes(
            executor,
            self._statements.ancestors(node_id),
            operation="get_ancestors",
            node_id=node_id,
            step="select ancestors",
            execution_options=execution_options,
        )

    def count(
        self,
        executor: Executor,
        *,
        execution_options: Mapping[str, Any] | None = None,
    ) -> int:
        """Total number of closure rows."""
        result = self._execute(
            executor,
            self._statements.count(),
            operation="count",
            node_id=None,
            step="count rows",
            execution_options=execution_options,
        )
        try:
            value = result.scalar_one()
        except SQLAlchemyError as exc:
            raise ExecutionError("count", None, "count rows", exc) from exc
        return scan_count(value)

    def empty(
        self,
        executor: Executor,
        *,
        execution_options: Mapping[str, Any] | None = None,
    ) -> bool:
        """True when the table holds no rows at all."""
        return self.count(executor, execution_options=execution_options) == 0

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(
        self,
        executor: Executor,
        parent_id: int,
        node_id: int,
        *,
        execution_options: Mapping[str, Any] | None = None,
    ) -> int:
        """Insert *node_id* as a direct child of *parent_id*.

        Inserting a node as its own parent on an empty table bootstraps a
        root: no ancestor rows exist to copy, so only the self row is
        written. Not idempotent; a repeated call duplicates rows.

        Returns:
            Number of rows written (-1 if the driver cannot say).
        """
        links = self._execute(
            executor,
            self._statements.insert_ancestor_links(parent_id, node_id),
            operation="insert",
            node_id=node_id,
            step="insert ancestor links",
            execution_options=execution_options,
        )
        own = self._execute(
            executor,
            self._statements.insert_self(node_id),
            operation="insert",
            node_id=node_id,
            step="insert self row",
            execution_options=execution_options,
        )
        written = _affected(links, own)
        logger.debug("insert: node=%s parent=%s rows=%s", node_id, parent_id, written)
        return written

    def delete(
        self,
        executor: Executor,
        node_id: int,
        *,
        execution_options: Mapping[str, Any] | None = None,
    ) -> int:
        """Remove *node_id*, its whole subtree, and every row naming them.

        Deleting an unknown node is a no-op that returns 0.

        Returns:
            Number of rows removed (-1 if the driver cannot say).
        """
        subtree = self._execute(
            executor,
            self._statements.delete_subtree(node_id),
            operation="delete",
            node_id=node_id,
            step="delete subtree rows",
            execution_options=execution_options,
        )
        remaining = self._execute(
            executor,
            self._statements.delete_remaining(node_id),
            operation="delete",
            node_id=node_id,
            step="delete remaining rows",
            execution_options=execution_options,
        )
        removed = _affected(subtree, remaining)
        if removed == 0:
            logger.warning("delete: node %s not found, nothing removed", node_id)
        else:
            logger.debug("delete: node=%s rows=%s", node_id, removed)
        return removed

    def move(
        self,
        executor: Executor,
        node_id: int,
        new_parent_id: int,
        *,
        execution_options: Mapping[str, Any] | None = None,
    ) -> int:
        """Re-parent the subtree rooted at *node_id* under *new_parent_id*.

        Rows inside the subtree are kept. Rows linking the subtree to its
        old ancestors are deleted, then every (new ancestor, subtree member)
        pair is inserted with its recomputed depth.

        Raises:
            IllegalMoveError: If *new_parent_id* is *node_id* or one of its
                descendants. Checked before anything is written.

        Returns:
            Number of rows inserted by the reattach step.
        """
        subtree = self._read_nodes(
            executor,
            self._statements.descendants(node_id),
            operation="move",
            node_id=node_id,
            step="select subtree",
            execution_options=execution_options,
        )
        subtree_ids = node_ids(subtree)
        if new_parent_id == node_id or new_parent_id in subtree_ids:
            raise IllegalMoveError(node_id, new_parent_id)
        if not subtree_ids:
            logger.warning("move: node %s not found, nothing moved", node_id)
            return 0

        detached = self._execute(
            executor,
            self._statements.detach(node_id),
            operation="move",
            node_id=node_id,
            step="detach subtree",
            execution_options=execution_options,
        )

        ancestors = self._read_nodes(
            executor,
            self._statements.ancestors(new_parent_id),
            operation="move",
            node_id=node_id,
            step="select new ancestors",
            execution_options=execution_options,
        )
        ancestor_ids = node_ids(ancestors)
        ancestor_ids.append(new_parent_id)

        reattached = self._execute(
            executor,
            self._statements.reattach(node_id, new_parent_id, ancestor_ids, subtree_ids),
            operation="move",
            node_id=node_id,
            step="reattach subtree",
            execution_options=execution_options,
        )
        inserted = _affected(reattached)
        if inserted == 0:
            logger.warning(
                "move: new parent %s not found, node %s is now a root",
                new_parent_id,
                node_id,
            )
        logger.debug(
            "move: node=%s new_parent=%s subtree=%d detached=%s reattached=%s",
            node_id,
            new_parent_id,
            len(subtree_ids),
            _affected(detached),
            inserted,
        )
        return inserted

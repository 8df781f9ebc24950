"""ClosureTree: a transaction-scoped handle on one closure table.

ClosureRelation leaves transactions to its caller. ClosureTree is that
caller for the common case: it owns an engine and a session, and runs
every mutation inside a single transaction that is committed on success
and rolled back on any error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from closuretab.models.config import ClosureConfig
from closuretab.relation import ClosureRelation
from closuretab.storage.engine import create_closure_engine, create_session_factory, init_db

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.orm import Session

    from closuretab.models.node import Node

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class ClosureTree:
    """One closure table behind one SQLAlchemy session.

    Example::

        with ClosureTree.open("tree.db") as tree:
            tree.insert(0, 0)
            tree.insert(0, 1)
            tree.descendants(0)
    """

    def __init__(
        self,
        session: Session,
        relation: ClosureRelation,
        *,
        engine: Engine | None = None,
        execution_options: Mapping[str, Any] | None = None,
    ) -> None:
        self._session = session
        self._relation = relation
        self._engine = engine
        self._execution_options = dict(execution_options or {})
        self._in_batch = False
        self._closed = False

    @classmethod
    def open(
        cls,
        path: str = ":memory:",
        *,
        url: str | None = None,
        config: ClosureConfig | None = None,
        create: bool = True,
        execution_options: Mapping[str, Any] | None = None,
    ) -> ClosureTree:
        """Open a closure table in a SQLite file (or any SQLAlchemy URL).

        Args:
            path: SQLite path.  ``":memory:"`` for in-memory (default).
            url: Full SQLAlchemy URL; overrides *path*.
            config: Table/column binding.  Defaults to ``closure(id, parent_id, depth)``.
            create: Create the table if it does not exist.
            execution_options: Passed with every statement (e.g. timeouts).
        """
        config = config or ClosureConfig()
        engine = create_closure_engine(path, url=url)
        if create:
            init_db(engine, config)
        session = create_session_factory(engine)()
        return cls(
            session,
            ClosureRelation(config),
            engine=engine,
            execution_options=execution_options,
        )

    @property
    def relation(self) -> ClosureRelation:
        return self._relation

    @property
    def config(self) -> ClosureConfig:
        return self._relation.config

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _mutate(self, fn: Callable[[], _T]) -> _T:
        if self._in_batch:
            return fn()
        try:
            result = fn()
        except Exception:
            logger.debug("closure mutation failed, rolling back", exc_info=True)
            self._session.rollback()
            raise
        self._session.commit()
        return result

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Group several mutations into one transaction.

        Example::

            with tree.batch():
                tree.insert(0, 1)
                tree.move(1, 5)
        """
        if self._in_batch:
            raise RuntimeError("batch() cannot be nested")
        self._in_batch = True
        try:
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        finally:
            self._in_batch = False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def descendants(self, root_id: int) -> list[Node]:
        return self._relation.get_descendants(
            self._session, root_id, execution_options=self._execution_options
        )

    def ancestors(self, node_id: int) -> list[Node]:
        return self._relation.get_ancestors(
            self._session, node_id, execution_options=self._execution_options
        )

    def count(self) -> int:
        return self._relation.count(self._session, execution_options=self._execution_options)

    def empty(self) -> bool:
        return self._relation.empty(self._session, execution_options=self._execution_options)

    def insert(self, parent_id: int, node_id: int) -> int:
        return self._mutate(
            lambda: self._relation.insert(
                self._session, parent_id, node_id, execution_options=self._execution_options
            )
        )

    def delete(self, node_id: int) -> int:
        return self._mutate(
            lambda: self._relation.delete(
                self._session, node_id, execution_options=self._execution_options
            )
        )

    def move(self, node_id: int, new_parent_id: int) -> int:
        return self._mutate(
            lambda: self._relation.move(
                self._session, node_id, new_parent_id, execution_options=self._execution_options
            )
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the session and dispose the engine."""
        if self._closed:
            return
        self._closed = True
        self._session.close()
        if self._engine is not None:
            self._engine.dispose()

    def __enter__(self) -> ClosureTree:
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = ", closed=True" if self._closed else ""
        return f"ClosureTree(table='{self.config.table_name}'{state})"

"""Shared test fixtures for closuretab.

Provides an in-memory SQLite engine with the default closure table,
a connection that rolls back after each test, and a bound relation.
"""

import pytest

from closuretab.models.config import ClosureConfig
from closuretab.relation import ClosureRelation
from closuretab.storage.engine import create_closure_engine, init_db


@pytest.fixture
def config() -> ClosureConfig:
    return ClosureConfig()


@pytest.fixture
def engine(config):
    """In-memory SQLite engine with the closure table created."""
    eng = create_closure_engine(":memory:")
    init_db(eng, config)
    yield eng
    eng.dispose()


@pytest.fixture
def conn(engine):
    """Connection inside a transaction that is rolled back after each test."""
    with engine.connect() as connection:
        trans = connection.begin()
        yield connection
        trans.rollback()


@pytest.fixture
def relation(config) -> ClosureRelation:
    return ClosureRelation(config)


# ------------------------------------------------------------------
# Shared test helpers
# ------------------------------------------------------------------

def as_triples(nodes) -> list[tuple[int, int, int]]:
    """Nodes as sorted (id, parent_id, depth) tuples for order-free comparison."""
    return sorted((n.id, n.parent_id, n.depth) for n in nodes)


def build_chain(relation, conn) -> None:
    """0 -> 1 -> 2 -> 3."""
    relation.insert(conn, 0, 0)
    relation.insert(conn, 0, 1)
    relation.insert(conn, 1, 2)
    relation.insert(conn, 2, 3)


def build_fork(relation, conn) -> None:
    """0 -> 1 -> 2 -> {3, 4} and 0 -> 5."""
    relation.insert(conn, 0, 0)
    relation.insert(conn, 0, 1)
    relation.insert(conn, 1, 2)
    relation.insert(conn, 2, 3)
    relation.insert(conn, 2, 4)
    relation.insert(conn, 0, 5)

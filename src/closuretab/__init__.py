"""closuretab: closure-table maintenance for trees stored in SQL.

A closure table keeps one row per ancestor/descendant pair, so whole
subtrees and ancestor chains are single indexed reads. closuretab keeps
those rows consistent under insert, delete, and move.
"""

from closuretab._version import __version__

# Core entry point
from closuretab.relation import ClosureRelation

# Transaction-scoped convenience handle
from closuretab.tree import ClosureTree

# Configuration
from closuretab.models.config import ClosureConfig, ColumnBinding, ColumnRole

# Domain values
from closuretab.models.node import Node
from closuretab.codec import iter_nodes, node_ids, scan_nodes

# Statement builder and executor protocol
from closuretab.statements import ClosureStatements
from closuretab.protocols import Executor

# Exceptions
from closuretab.exceptions import (
    ClosureTableError,
    ConfigurationError,
    ExecutionError,
    IllegalMoveError,
    OperationError,
    ScanError,
)

__all__ = [
    "__version__",
    "ClosureRelation",
    "ClosureTree",
    "ClosureConfig",
    "ColumnBinding",
    "ColumnRole",
    "Node",
    "iter_nodes",
    "node_ids",
    "scan_nodes",
    "ClosureStatements",
    "Executor",
    "ClosureTableError",
    "ConfigurationError",
    "ExecutionError",
    "IllegalMoveError",
    "OperationError",
    "ScanError",
]

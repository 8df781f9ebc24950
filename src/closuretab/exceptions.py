"""Closuretab exception hierarchy.

All closuretab-specific exceptions inherit from ClosureTableError.
"""

from __future__ import annotations


class ClosureTableError(Exception):
    """Base exception for all closuretab errors."""


class ConfigurationError(ClosureTableError):
    """Raised when a table/column binding is incomplete or invalid.

    Detected when the binding is built, never deferred to query time.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__(
            "Invalid closure table configuration: " + "; ".join(self.problems)
        )


class OperationError(ClosureTableError):
    """Base for failures raised while running a closure table operation."""

    def __init__(self, operation: str, node_id: int | None, detail: str) -> None:
        self.operation = operation
        self.node_id = node_id
        target = f" for node {node_id}" if node_id is not None else ""
        super().__init__(f"{operation}{target}: {detail}")


class ExecutionError(OperationError):
    """Raised when the executor reports a failure for a statement.

    The driver exception is chained as ``__cause__``.
    """

    def __init__(
        self, operation: str, node_id: int | None, step: str, cause: BaseException
    ) -> None:
        self.step = step
        super().__init__(operation, node_id, f"{step} failed: {cause}")


class ScanError(OperationError):
    """Raised when a result row cannot be decoded into a Node."""

    def __init__(
        self, operation: str, node_id: int | None, row_index: int, reason: str
    ) -> None:
        self.row_index = row_index
        super().__init__(operation, node_id, f"cannot decode row {row_index}: {reason}")


class IllegalMoveError(OperationError):
    """Raised when a subtree would be moved underneath itself."""

    def __init__(self, node_id: int, new_parent_id: int) -> None:
        self.new_parent_id = new_parent_id
        super().__init__(
            "move",
            node_id,
            f"destination {new_parent_id} lies inside the subtree rooted at {node_id}",
        )

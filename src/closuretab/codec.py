"""Row codec: result rows in, Node values out.

iter_nodes() is lazy and single-pass. It stops at the first row that
cannot be decoded and raises ScanError; scan_nodes() builds on it and
therefore never returns a partial list.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from closuretab.exceptions import ScanError
from closuretab.models.node import Node


def _as_int(value: Any, field: str) -> int:
    # Drivers may hand back Decimal or float for integral columns.
    if value is None:
        raise ValueError(f"{field} is NULL")
    if isinstance(value, bool):
        raise ValueError(f"{field} is not an integer: {value!r}")
    if isinstance(value, int):
        return value
    try:
        coerced = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"{field} is not an integer: {value!r}") from None
    if coerced != value:
        raise ValueError(f"{field} is not an integer: {value!r}")
    return coerced


def decode_node(row: Sequence[Any]) -> Node:
    """Decode one ``(id, parent_id, depth)`` row.

    Raises:
        ValueError: On wrong arity, NULLs, non-integers, or a negative depth.
    """
    if len(row) != 3:
        raise ValueError(f"expected 3 columns, got {len(row)}")
    node_id = _as_int(row[0], "id")
    parent_id = _as_int(row[1], "parent_id")
    depth = _as_int(row[2], "depth")
    if depth < 0:
        raise ValueError(f"depth is negative: {depth}")
    return Node(id=node_id, parent_id=parent_id, depth=depth)


def iter_nodes(
    rows: Iterable[Sequence[Any]],
    *,
    operation: str = "scan",
    node_id: int | None = None,
) -> Iterator[Node]:
    """Lazily decode *rows* into Nodes.

    Args:
        rows: Any iterable of 3-tuples, typically a SQLAlchemy Result.
        operation: Operation name carried into a ScanError.
        node_id: Node id carried into a ScanError.
    """
    for index, row in enumerate(rows):
        try:
            yield decode_node(row)
        except ValueError as exc:
            raise ScanError(operation, node_id, index, str(exc)) from exc


def scan_nodes(
    rows: Iterable[Sequence[Any]],
    *,
    operation: str = "scan",
    node_id: int | None = None,
) -> list[Node]:
    """Decode every row, or raise ScanError without a partial result."""
    return list(iter_nodes(rows, operation=operation, node_id=node_id))


def scan_count(value: Any, *, operation: str = "count") -> int:
    """Decode a single ``count(*)`` value."""
    try:
        count = _as_int(value, "count")
    except ValueError as exc:
        raise ScanError(operation, None, 0, str(exc)) from exc
    if count < 0:
        raise ScanError(operation, None, 0, f"count is negative: {count}")
    return count


def node_ids(nodes: Iterable[Node]) -> list[int]:
    """Ids of *nodes*, in order."""
    return [n.id for n in nodes]

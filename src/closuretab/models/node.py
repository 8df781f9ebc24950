"""Node domain model for closuretab.

Node is the value returned by the read operations: one decoded closure
row. It is built per query result and never persisted on its own.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Node:
    """A decoded closure row.

    For descendant queries ``id`` is the descendant and ``parent_id`` the
    queried root. For ancestor queries both fields hold the ancestor's id.
    """

    id: int
    parent_id: int
    depth: int

    @property
    def is_self(self) -> bool:
        """True for a node's zero-distance row to itself."""
        return self.depth == 0 and self.id == self.parent_id

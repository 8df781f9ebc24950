"""Protocol definitions for closuretab.

Executor is the only collaborator the closure table core needs: something
that runs a SQLAlchemy Core statement and hands back a Result. Both
``sqlalchemy.Connection`` and ``sqlalchemy.orm.Session`` satisfy it.

The core never opens, commits, or rolls back on an Executor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlalchemy import Executable, Result


@runtime_checkable
class Executor(Protocol):
    """Runs parameterized statements on behalf of a ClosureRelation.

    The returned Result covers the three capabilities the core uses:
    iterating rows, reading a single scalar, and reading ``rowcount``.
    ``execution_options`` carries caller context such as timeouts.
    """

    def execute(
        self,
        statement: Executable,
        *args: Any,
        execution_options: Mapping[str, Any] = ...,
        **kwargs: Any,
    ) -> Result[Any]: ...

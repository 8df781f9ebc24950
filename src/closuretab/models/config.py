"""Configuration models for closuretab.

ColumnRole names the three logical columns of a closure table.
ColumnBinding maps each role to a physical column name.
ClosureConfig pairs a table name with its binding and is validated
eagerly: an incomplete binding never reaches query time.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from closuretab.exceptions import ConfigurationError

DEFAULT_TABLE_NAME = "closure"


class ColumnRole(str, enum.Enum):
    """Logical roles of the closure table columns."""

    CHILD = "child"
    PARENT = "parent"
    DEPTH = "depth"

    def __str__(self) -> str:
        return self.value


class ColumnBinding(BaseModel):
    """Physical column names for each ColumnRole."""

    model_config = {"frozen": True}

    child: str = "id"
    parent: str = "parent_id"
    depth: str = "depth"

    @field_validator("child", "parent", "depth")
    @classmethod
    def _non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("column name must not be blank")
        return v

    @model_validator(mode="after")
    def _distinct(self) -> ColumnBinding:
        names = [self.child, self.parent, self.depth]
        if len(set(names)) != len(names):
            raise ValueError(f"column names must be distinct, got {names}")
        return self

    def name_for(self, role: ColumnRole) -> str:
        return getattr(self, role.value)


class ClosureConfig(BaseModel):
    """Table name plus column binding for one closure table."""

    model_config = {"frozen": True}

    table_name: str = DEFAULT_TABLE_NAME
    columns: ColumnBinding = ColumnBinding()

    @field_validator("table_name")
    @classmethod
    def _table_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("table name must not be blank")
        return v

    @classmethod
    def from_mapping(
        cls, table_name: str, mapping: Mapping[ColumnRole | str, str]
    ) -> ClosureConfig:
        """Build a config from a role -> column mapping.

        Keys may be ColumnRole members or their string values. Every role
        must be present; unknown keys are rejected.

        Raises:
            ConfigurationError: If roles are missing or unknown, or a name
                fails validation.
        """
        problems: list[str] = []
        names: dict[str, str] = {}
        for key, column in mapping.items():
            try:
                role = ColumnRole(key)
            except ValueError:
                problems.append(f"unknown column role {key!r}")
                continue
            names[role.value] = column

        missing = [r.value for r in ColumnRole if r.value not in names]
        if missing:
            problems.append("missing column roles: " + ", ".join(missing))
        if problems:
            raise ConfigurationError(problems)

        try:
            return cls(table_name=table_name, columns=ColumnBinding(**names))
        except ValidationError as exc:
            raise ConfigurationError(
                [f"{'.'.join(str(p) for p in err['loc']) or 'columns'}: {err['msg']}"
                 for err in exc.errors()]
            ) from None

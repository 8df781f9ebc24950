"""Tests for configuration models.

Covers:
- Defaults match the conventional closure(id, parent_id, depth) schema
- from_mapping accepts ColumnRole or string keys
- Missing, unknown, blank, and duplicated roles raise ConfigurationError
- Configs are immutable
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from closuretab.exceptions import ConfigurationError
from closuretab.models.config import ClosureConfig, ColumnBinding, ColumnRole


class TestDefaults:
    def test_default_binding(self):
        config = ClosureConfig()
        assert config.table_name == "closure"
        assert config.columns.child == "id"
        assert config.columns.parent == "parent_id"
        assert config.columns.depth == "depth"

    def test_name_for(self):
        binding = ColumnBinding()
        assert binding.name_for(ColumnRole.PARENT) == "parent_id"


class TestFromMapping:
    def test_role_keys(self):
        config = ClosureConfig.from_mapping(
            "paths",
            {ColumnRole.CHILD: "d", ColumnRole.PARENT: "a", ColumnRole.DEPTH: "n"},
        )
        assert config.columns == ColumnBinding(child="d", parent="a", depth="n")

    def test_string_keys(self):
        config = ClosureConfig.from_mapping("paths", {"child": "d", "parent": "a", "depth": "n"})
        assert config.table_name == "paths"

    def test_missing_roles(self):
        with pytest.raises(ConfigurationError) as excinfo:
            ClosureConfig.from_mapping("paths", {"child": "d"})
        assert "parent" in str(excinfo.value)
        assert "depth" in str(excinfo.value)

    def test_unknown_role(self):
        with pytest.raises(ConfigurationError, match="unknown column role 'weight'"):
            ClosureConfig.from_mapping(
                "paths", {"child": "d", "parent": "a", "depth": "n", "weight": "w"}
            )

    def test_blank_column(self):
        with pytest.raises(ConfigurationError, match="blank"):
            ClosureConfig.from_mapping("paths", {"child": " ", "parent": "a", "depth": "n"})

    def test_duplicate_columns(self):
        with pytest.raises(ConfigurationError, match="distinct"):
            ClosureConfig.from_mapping("paths", {"child": "x", "parent": "x", "depth": "n"})

    def test_blank_table(self):
        with pytest.raises(ConfigurationError) as excinfo:
            ClosureConfig.from_mapping("", {"child": "d", "parent": "a", "depth": "n"})
        assert any("table_name" in p for p in excinfo.value.problems)


class TestImmutability:
    def test_frozen(self):
        config = ClosureConfig()
        with pytest.raises(ValidationError):
            config.table_name = "other"

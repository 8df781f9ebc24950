"""CLI tests for closuretab -- exercises every command via Click's CliRunner.

Each test uses runner.isolated_filesystem() with a file-backed database
since every CLI invocation opens its own connection.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from closuretab.cli import cli
from closuretab.models.node import Node
from closuretab.tree import ClosureTree


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


def _invoke(runner, *args: str):
    return runner.invoke(cli, ["--db", "tree.db", *args])


def _setup_tree(runner) -> None:
    """0 -> 1 -> 2 and 0 -> 3."""
    assert _invoke(runner, "init").exit_code == 0
    for parent, node in [(0, 0), (0, 1), (1, 2), (0, 3)]:
        result = _invoke(runner, "insert", str(parent), str(node))
        assert result.exit_code == 0, result.output


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class TestInit:
    def test_creates_table(self, runner):
        with runner.isolated_filesystem():
            result = _invoke(runner, "init")
            assert result.exit_code == 0
            assert "ready" in result.output

    def test_missing_db_errors(self, runner):
        with runner.isolated_filesystem():
            result = _invoke(runner, "empty")
            assert result.exit_code == 1
            assert "Database not found" in result.output


class TestMutations:
    def test_insert_and_descendants(self, runner):
        with runner.isolated_filesystem():
            _setup_tree(runner)
            result = _invoke(runner, "descendants", "0")
            assert result.exit_code == 0
            lines = [line.split() for line in result.output.strip().splitlines()[1:]]
            assert sorted(lines) == [["0", "0", "0"], ["1", "0", "1"], ["2", "0", "2"], ["3", "0", "1"]]
            depths = [int(row[2]) for row in lines]
            assert depths == sorted(depths)

    def test_ancestors(self, runner):
        with runner.isolated_filesystem():
            _setup_tree(runner)
            result = _invoke(runner, "ancestors", "2")
            assert result.exit_code == 0
            lines = [line.split() for line in result.output.strip().splitlines()[1:]]
            assert lines == [["0", "0", "2"], ["1", "1", "1"]]

    def test_move(self, runner):
        with runner.isolated_filesystem():
            _setup_tree(runner)
            result = _invoke(runner, "move", "2", "3")
            assert result.exit_code == 0
            assert "Moved node 2 under 3" in result.output
            with ClosureTree.open("tree.db", create=False) as tree:
                assert tree.ancestors(2) == [Node(0, 0, 2), Node(3, 3, 1)]

    def test_illegal_move(self, runner):
        with runner.isolated_filesystem():
            _setup_tree(runner)
            result = _invoke(runner, "move", "1", "2")
            assert result.exit_code == 1
            assert "Error:" in result.output
            assert "inside the subtree" in result.output

    def test_delete(self, runner):
        with runner.isolated_filesystem():
            _setup_tree(runner)
            result = _invoke(runner, "delete", "1")
            assert result.exit_code == 0
            assert "Deleted subtree of node 1" in result.output
            with ClosureTree.open("tree.db", create=False) as tree:
                assert tree.descendants(1) == []

    def test_delete_unknown(self, runner):
        with runner.isolated_filesystem():
            _setup_tree(runner)
            result = _invoke(runner, "delete", "42")
            assert result.exit_code == 0
            assert "nothing deleted" in result.output


class TestEmpty:
    def test_empty_then_rows(self, runner):
        with runner.isolated_filesystem():
            _invoke(runner, "init")
            result = _invoke(runner, "empty")
            assert result.exit_code == 0
            assert result.output.strip() == "empty"
            _invoke(runner, "insert", "0", "0")
            result = _invoke(runner, "empty")
            assert result.output.strip() == "1 rows"


class TestConfiguration:
    def test_custom_columns(self, runner):
        with runner.isolated_filesystem():
            args = ["--db", "tree.db", "--table", "paths", "--child-column", "d",
                    "--parent-column", "a", "--depth-column", "n"]
            assert runner.invoke(cli, [*args, "init"]).exit_code == 0
            assert runner.invoke(cli, [*args, "insert", "0", "0"]).exit_code == 0
            assert runner.invoke(cli, [*args, "insert", "0", "1"]).exit_code == 0
            result = runner.invoke(cli, [*args, "ancestors", "1"])
            assert result.exit_code == 0
            assert result.output.strip().splitlines()[1].split() == ["0", "0", "1"]

    def test_invalid_binding(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--db", "tree.db", "--child-column", "x",
                                         "--parent-column", "x", "init"])
            assert result.exit_code == 1
            assert "distinct" in result.output

"""
Test CLI run command functionality

Tests the core business scenarios for running work trees via CLI.
"""

import json
import pytest
from typer.testing import CliRunner
from seriesflow.cli.main import app
from seriesflow.cli.commands.run import load_work_tree

runner = CliRunner()

PASSING = """
    def ok(callback):
        callback(None, "ok")

    series = {"a": ok, "group": {"b": ok}}
"""

FAILING = """
    def ok(callback):
        callback(None, "ok")

    def broken(callback):
        callback("broken")

    series = {"a": ok, "group": {"e": broken, "c": ok}}
"""


class TestRunCommand:
    """Test cases for run tree command"""

    def test_passing_tree_exits_zero(self, tree_module):
        name = tree_module(PASSING)
        result = runner.invoke(app, ["run", "tree", f"{name}:series"])

        assert result.exit_code == 0
        assert "success" in result.stdout
        assert "Run Summary" in result.stdout

    def test_failing_tree_exits_one(self, tree_module):
        name = tree_module(FAILING)
        result = runner.invoke(app, ["run", "tree", f"{name}:series", "--no-summary"])

        assert result.exit_code == 1
        assert "failure" in result.stdout
        assert "broken" in result.stdout
        assert "Run Summary" not in result.stdout

    def test_json_format(self, tree_module):
        name = tree_module(FAILING)
        result = runner.invoke(app, ["run", "tree", f"{name}:series", "--format", "json"])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["key"] == "failure"
        assert data["results"]["a"]["succeeded"] is True
        assert data["results"]["group"]["results"]["e"]["message"] == "broken"

    def test_text_format(self, tree_module):
        name = tree_module(PASSING)
        result = runner.invoke(app, ["run", "tree", f"{name}:series", "-f", "text", "--no-summary"])

        assert result.exit_code == 0
        assert "✓ success: " in result.stdout
        assert "a: ok" in result.stdout

    def test_output_file(self, tree_module, tmp_path):
        name = tree_module(PASSING)
        output = tmp_path / "report.json"
        result = runner.invoke(app, ["run", "tree", f"{name}:series", "--output", str(output)])

        assert result.exit_code == 0
        assert "Result saved to" in result.stdout
        data = json.loads(output.read_text())
        assert data["key"] == "success"

    def test_factory_attribute(self, tree_module):
        name = tree_module("""
            def build():
                return {"a": lambda callback: callback(None, "built")}
        """)
        result = runner.invoke(app, ["run", "tree", f"{name}:build", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["results"]["a"]["message"] == "built"

    def test_malformed_root_exits_two(self, tree_module):
        name = tree_module("""
            series = ["not", "a", "mapping"]
        """)
        result = runner.invoke(app, ["run", "tree", f"{name}:series"])

        assert result.exit_code == 2
        assert "Invalid series" in result.output

    def test_unknown_format(self, tree_module):
        name = tree_module(PASSING)
        result = runner.invoke(app, ["run", "tree", f"{name}:series", "-f", "xml"])
        assert result.exit_code == 2

    def test_bad_target(self):
        result = runner.invoke(app, ["run", "tree", "no_colon_here"])
        assert result.exit_code == 2
        assert "package.module:attribute" in result.output


class TestLoadWorkTree:
    """Test load_work_tree()"""

    def test_missing_module(self):
        with pytest.raises(ValueError, match="Cannot import module"):
            load_work_tree("seriesflow_no_such_module_xyz:series")

    def test_missing_attribute(self, tree_module):
        name = tree_module(PASSING)
        with pytest.raises(ValueError, match="has no attribute"):
            load_work_tree(f"{name}:missing")

    def test_mapping_returned_as_is(self, tree_module):
        name = tree_module(PASSING)
        tree = load_work_tree(f"{name}:series")
        assert list(tree) == ["a", "group"]

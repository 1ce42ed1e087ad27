"""
Fixtures for CLI tests
"""
import itertools
import textwrap
import pytest

_module_ids = itertools.count()


@pytest.fixture
def tree_module(tmp_path, monkeypatch):
    """
    Write a throwaway module exposing work trees and return its import name

    Usage:
        name = tree_module('''
            series = {"a": lambda callback: callback(None, "a")}
        ''')
        runner.invoke(app, ["run", "tree", f"{name}:series"])
    """
    monkeypatch.syspath_prepend(str(tmp_path))

    def factory(source: str) -> str:
        name = f"seriesflow_cli_trees_{next(_module_ids)}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source))
        return name

    return factory

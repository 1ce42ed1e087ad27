"""
Built-in self-check tree

The checks are themselves executable units, so ``seriesflow selftest check`` runs
the engine against its own sample tree and reports the result like any other
work tree.
"""

from typing import Any, Dict

from seriesflow.core.execution import is_exhausted, clone_work_tree, run_series
from seriesflow.core.types import CompletionCallback, FAILURE_KEY


def build_sample_tree() -> Dict[str, Any]:
    """Sample tree: one success at the root, one failure and one success nested"""
    return {
        "a": lambda callback: callback(None, "a"),
        "b": {
            "e": lambda callback: callback("e"),
            "c": lambda callback: callback(None, "c"),
        },
    }


def check_empty(callback: CompletionCallback) -> None:
    if not is_exhausted({}):
        return callback("Empty should be empty")
    if is_exhausted({"a": "a"}):
        return callback("Not empty is empty")
    callback(None, "is_exhausted works")


def check_clone(callback: CompletionCallback) -> None:
    def unit(callback):
        callback(None)

    original = {"a": unit, "b": {"c": unit}}
    cloned = clone_work_tree(original)
    if cloned["a"] is not unit:
        return callback("Cloned tree should keep units by reference")
    if not isinstance(cloned["b"], dict) or cloned["b"] is original["b"]:
        return callback("Cloned tree should copy nested mappings")
    if cloned["b"]["c"] is not unit:
        return callback("Cloned tree should keep nested units by reference")
    callback(None, "clone works")


async def check_run(callback: CompletionCallback) -> None:
    report = await run_series(build_sample_tree())
    checks = [
        (report.failed, "Root should be failure"),
        (report.key == FAILURE_KEY, "Root should be renamed to failure"),
        ("a" in report and report["a"].succeeded, "Should have success for a"),
        ("a" in report and report["a"].message == "a", "Should have an a for a"),
        ("b" in report and report["b"].failed, "Should have failure for b"),
        ("b" in report and report["b"]["c"].succeeded, "Should have success for b.c"),
        ("b" in report and report["b"]["c"].message == "c", "Should have a c for b.c"),
        ("b" in report and report["b"]["e"].failed, "Should have failure for b.e"),
        ("b" in report and report["b"]["e"].message == "e", "Should have an e for b.e"),
    ]
    for passed, message in checks:
        if not passed:
            return callback(message)
    callback(None, "run works")


def build_selftest_tree() -> Dict[str, Any]:
    """Work tree running all self-checks"""
    return {
        "empty": check_empty,
        "clone": check_clone,
        "run": check_run,
    }

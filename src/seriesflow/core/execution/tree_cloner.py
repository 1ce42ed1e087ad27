"""
Working copies of work trees

The scheduler consumes entries from its working copy as they complete, so it
never touches the caller's mapping. Executable units are kept by reference;
only the mappings are copied.
"""

import json
from collections.abc import Mapping
from typing import Any, Dict


class WorkTreeError(ValueError):
    """Raised when the root of a work tree is not a mapping"""

    def __init__(self, tree: Any):
        self.tree = tree
        super().__init__(f"Invalid series {_describe(tree)}")


def _describe(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def clone_work_tree(tree: Any) -> Dict[str, Any]:
    """
    Clone a work tree, performing a sanity check on the root

    Args:
        tree: Caller-owned work tree

    Returns:
        A fresh dict with the same keys in the same order; nested mappings are
        cloned recursively, every other value is kept by reference

    Raises:
        WorkTreeError: If the root is not a mapping
    """
    if not isinstance(tree, Mapping):
        raise WorkTreeError(tree)
    return _clone_mapping(tree)


def _clone_mapping(tree: Mapping) -> Dict[str, Any]:
    copy: Dict[str, Any] = {}
    for key, value in tree.items():
        if isinstance(value, Mapping):
            copy[key] = _clone_mapping(value)
        else:
            # Units by reference; invalid leaves are reported when run
            copy[key] = value
    return copy


def is_exhausted(series: Mapping[str, Any]) -> bool:
    """
    Find out if a working copy has nothing left to run

    Falsy entries (None, 0, "", False) are empty slots and do not count.
    Nested mappings always count, even when they are empty.
    """
    for value in series.values():
        if value or isinstance(value, Mapping):
            return False
    return True


__all__ = [
    "WorkTreeError",
    "clone_work_tree",
    "is_exhausted",
]

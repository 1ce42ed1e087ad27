"""
Rich rendering of reports for the CLI
"""

from rich.tree import Tree
from seriesflow.core.results import Aggregate, Result
from seriesflow.core.types import ResultState

STATE_STYLES = {
    ResultState.SUCCESS: ("✓", "green"),
    ResultState.FAILURE: ("✕", "bold red"),
    ResultState.UNKNOWN: ("?", "bold magenta"),
    ResultState.INVALID: ("???", "bold magenta"),
}


def _label(result: Result) -> str:
    marker, style = STATE_STYLES[result.state]
    label = f"[{style}]{marker} {result.key}[/{style}]"
    if not isinstance(result, Aggregate) and result.message:
        label += f": {result.message}"
    return label


def build_tree(result: Result, parent: Tree = None) -> Tree:
    """
    Build a rich Tree mirroring a report

    Args:
        result: Root report (or any node of it)
        parent: Tree node to attach to; a new root is created when omitted

    Returns:
        The rich Tree for ``result``
    """
    node = parent.add(_label(result)) if parent is not None else Tree(_label(result))
    if isinstance(result, Aggregate):
        for child in result.results.values():
            build_tree(child, node)
    return node

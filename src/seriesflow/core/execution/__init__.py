"""
Execution module for running work trees
"""

from seriesflow.core.execution.diagnostics import Diagnostics
from seriesflow.core.execution.tree_cloner import (
    WorkTreeError,
    clone_work_tree,
    is_exhausted,
)
from seriesflow.core.execution.series_runner import (
    SeriesRunner,
    run,
    run_series,
)

__all__ = [
    "Diagnostics",
    "WorkTreeError",
    "clone_work_tree",
    "is_exhausted",
    "SeriesRunner",
    "run",
    "run_series",
]

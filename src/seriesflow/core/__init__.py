"""
Core execution engine modules

This module contains all core components for running work trees:
- types.py: Core type definitions (ResultState, callback and hook aliases, root markers)
- results.py: Result model (Outcome, Aggregate)
- report.py: Serializable report snapshots (ResultSnapshot)
- execution/: Tree cloning, diagnostics and the sequential runner (SeriesRunner)
- config/: Global configuration registry (hooks)
- utils/: Logging and text rendering

All core modules are always included (pip install seriesflow).
"""

from seriesflow.core.types import (
    ResultState,
    CompletionCallback,
    ExecutableUnit,
    WorkTree,
    UnitPath,
    PENDING_KEY,
    SUCCESS_KEY,
    FAILURE_KEY,
    DUPLICATED_CALL_MESSAGE,
)
from seriesflow.core.results import Outcome, Aggregate
from seriesflow.core.report import ResultSnapshot
from seriesflow.core.execution import (
    Diagnostics,
    WorkTreeError,
    clone_work_tree,
    SeriesRunner,
    run,
    run_series,
)
from seriesflow.core.config import (
    get_pre_hooks,
    get_post_hooks,
    get_run_hooks,
)

__all__ = [
    # Core types
    "ResultState",
    "CompletionCallback",
    "ExecutableUnit",
    "WorkTree",
    "UnitPath",
    "PENDING_KEY",
    "SUCCESS_KEY",
    "FAILURE_KEY",
    "DUPLICATED_CALL_MESSAGE",
    # Results
    "Outcome",
    "Aggregate",
    "ResultSnapshot",
    # Execution
    "Diagnostics",
    "WorkTreeError",
    "clone_work_tree",
    "SeriesRunner",
    "run",
    "run_series",
    # Configuration Registry (internal)
    "get_pre_hooks",
    "get_post_hooks",
    "get_run_hooks",
]

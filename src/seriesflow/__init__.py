"""
seriesflow - Sequential test/task tree runner

Runs a tree of named asynchronous units one at a time and reports a
tree-shaped pass/fail result.

Core modules (always included):
- core.execution: SeriesRunner, run(), run_series(), Diagnostics
- core.results: Outcome and Aggregate result model
- core.report: ResultSnapshot for JSON output
- core.config: Hook registry
- cli: Command line interface (`seriesflow` console script)
"""

__version__ = "0.3.0"

from seriesflow.core import (
    ResultState,
    Outcome,
    Aggregate,
    ResultSnapshot,
    Diagnostics,
    WorkTreeError,
    SeriesRunner,
    run,
    run_series,
)
from seriesflow.core.utils.formatting import format_result

# Unified decorators (Flask-style API)
from seriesflow.core.decorators import (
    register_pre_hook,
    register_post_hook,
    register_run_hook,
    clear_config,
)

__all__ = [
    # Core engine
    "ResultState",
    "Outcome",
    "Aggregate",
    "ResultSnapshot",
    "Diagnostics",
    "WorkTreeError",
    "SeriesRunner",
    "run",
    "run_series",
    "format_result",
    # Unified decorators (Flask-style API)
    "register_pre_hook",
    "register_post_hook",
    "register_run_hook",
    "clear_config",
    # Version
    "__version__",
]

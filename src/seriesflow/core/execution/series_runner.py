"""
Sequential runner for work trees

Runs every executable unit of a work tree exactly once, one at a time, and
folds the outcomes into a tree of Aggregates mirroring the work tree.
"""

import asyncio
import inspect
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

from seriesflow.core.config import get_all_run_hooks, get_post_hooks, get_pre_hooks
from seriesflow.core.execution.diagnostics import Diagnostics
from seriesflow.core.execution.tree_cloner import WorkTreeError, clone_work_tree, is_exhausted
from seriesflow.core.results import Aggregate, Outcome
from seriesflow.core.types import (
    PENDING_KEY,
    CompletionCallback,
    ExecutableUnit,
    RunHook,
    UnitPath,
    UnitPostHook,
    UnitPreHook,
    describe_path,
    terminal_marker,
)
from seriesflow.core.utils.logger import get_logger

logger = get_logger(__name__)


class SeriesRunner:
    """
    Sequential work tree runner

    Execution model:
    ----------------
    1. The caller's tree is cloned into a working copy; a root that is not a
       mapping is rejected with WorkTreeError before anything runs.
    2. Each level walks a snapshot of its keys. Sub-trees are recursed into,
       units are invoked with a completion callback, None entries are skipped
       and anything else is recorded as an invalid-value failure.
    3. Exactly one unit is in flight: the next sibling starts only after the
       current unit has signalled and its entry has been consumed from the
       working copy. Between items the runner yields one event loop tick.
    4. The root Aggregate starts as "pending" and is renamed "success" or
       "failure" when the tree is drained.

    A unit that never signals stalls the run; there is no timeout.

    Example:
        runner = SeriesRunner()
        report = await runner.execute({
            "a": lambda callback: callback(None, "a"),
            "b": {"c": lambda callback: callback("c failed")},
        })
        assert report.key == "failure"
    """

    def __init__(
        self,
        diagnostics: Optional[Diagnostics] = None,
        pre_hooks: Optional[List[UnitPreHook]] = None,
        post_hooks: Optional[List[UnitPostHook]] = None,
        run_hooks: Optional[Dict[str, List[RunHook]]] = None,
    ):
        """
        Initialize SeriesRunner

        Args:
            diagnostics: Diagnostics sink for this run (a fresh one by default)
            pre_hooks: Hooks called with the unit path before each unit runs
            post_hooks: Hooks called with (path, outcome) after a unit's first signal
            run_hooks: Run lifecycle hooks keyed by hook type
                Falls back to the config registry for any of the hook arguments left as None
        """
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.pre_hooks = pre_hooks if pre_hooks is not None else get_pre_hooks()
        self.post_hooks = post_hooks if post_hooks is not None else get_post_hooks()
        self.run_hooks = run_hooks if run_hooks is not None else get_all_run_hooks()

    def run(self, work_tree: Any, callback: CompletionCallback):
        """
        Callback-style entry point

        ``callback(error, report)`` is called exactly once: with (None, report)
        when the tree has been drained, or with (WorkTreeError, None) when the
        root is not a mapping.

        Args:
            work_tree: Caller-owned work tree
            callback: Completion callback

        Returns:
            The asyncio.Task running the tree when called inside a running
            event loop; otherwise the run is driven to completion with
            asyncio.run() and the report (or None) is returned
        """
        coro = self._run_with_callback(work_tree, callback)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        return loop.create_task(coro)

    async def execute(self, work_tree: Any) -> Aggregate:
        """
        Run a work tree and return the root report

        Args:
            work_tree: Caller-owned work tree

        Returns:
            Root Aggregate keyed "success" or "failure"

        Raises:
            WorkTreeError: If the root is not a mapping
        """
        try:
            series = clone_work_tree(work_tree)
        except WorkTreeError as e:
            self.diagnostics.error(str(e))
            raise

        await self._call_hooks(self.run_hooks.get("on_run_started", []), "on_run_started", work_tree)

        report = Aggregate(PENDING_KEY)
        await self._run_level(series, report, ())
        report.key = terminal_marker(report.failed)

        counts = report.count()
        logger.info(
            f"Run finished with {report.key}: "
            f"{counts['success']} succeeded, {counts['failure']} failed, "
            f"{counts['invalid']} invalid"
        )

        hook_type = "on_run_failed" if report.failed else "on_run_completed"
        await self._call_hooks(self.run_hooks.get(hook_type, []), hook_type, report)
        return report

    async def _run_with_callback(self, work_tree: Any, callback: CompletionCallback) -> Optional[Aggregate]:
        try:
            report = await self.execute(work_tree)
        except WorkTreeError as e:
            callback(e, None)
            return None
        callback(None, report)
        return report

    async def _run_level(
        self,
        series: Dict[str, Any],
        aggregate: Aggregate,
        path: UnitPath,
        parents: Tuple[Aggregate, ...] = (),
    ) -> Aggregate:
        """
        Drain one level of the working copy into ``aggregate``

        Args:
            series: Working copy of this level; entries are consumed as they finish
            aggregate: Aggregate collecting this level's results
            path: Path of this level from the root
            parents: Aggregates of the enclosing levels, root first

        Returns:
            The populated aggregate
        """
        for key in tuple(series.keys()):
            if is_exhausted(series):
                break
            if key not in series:
                continue

            value = series[key]
            item_path = path + (key,)

            if value is None:
                pass
            elif isinstance(value, Mapping):
                sub_aggregate = Aggregate(key)
                await self._run_level(value, sub_aggregate, item_path, parents + (aggregate,))
                aggregate.add(sub_aggregate)
            elif callable(value):
                await self._run_unit(value, key, parents + (aggregate,), item_path)
            else:
                outcome = Outcome.invalid_value(key, value, item_path)
                self.diagnostics.error(outcome.message, item_path)
                aggregate.add(outcome)

            if self._consume(series, key):
                await asyncio.sleep(0)

        return aggregate

    async def _run_unit(
        self,
        unit: ExecutableUnit,
        key: str,
        chain: Tuple[Aggregate, ...],
        path: UnitPath,
    ) -> Outcome:
        """
        Invoke one unit and wait for its first completion signal

        Every signal, duplicates included, settles the outcome, re-attaches it to
        the innermost aggregate of ``chain`` and refreshes the enclosing levels.
        Only the first signal releases the runner.
        """
        aggregate = chain[-1]
        outcome = Outcome(key, path, self.diagnostics)
        completed = asyncio.get_running_loop().create_future()

        def callback(error: Any = None, value: Any = None) -> None:
            outcome.settle(error, value)
            aggregate.add(outcome)
            self._propagate(chain)
            if not completed.done():
                completed.set_result(None)

        await self._call_hooks(self.pre_hooks, "pre", path)

        logger.debug(f"Running {describe_path(path)}")
        try:
            returned = unit(callback)
            if inspect.isawaitable(returned):
                await returned
        except Exception as e:
            logger.debug(f"Unit {describe_path(path)} raised {e!r}")
            callback(e)

        await completed

        if outcome.failed:
            self.diagnostics.error(f"{key} failed: {outcome.message}", path, state=outcome.state)

        await self._call_hooks(self.post_hooks, "post", path, outcome)
        return outcome

    @staticmethod
    def _propagate(chain: Tuple[Aggregate, ...]) -> None:
        """
        Re-add each level to its parent after a late signal changed it

        Stops at the first level not yet attached to its parent; that parent
        picks up the final flags when the level finishes. A root that already
        carries its terminal marker is renamed to match its flags.
        """
        for parent, child in zip(reversed(chain[:-1]), reversed(chain[1:])):
            if parent.get(child.key) is not child:
                break
            parent.add(child)
        root = chain[0]
        if root.key != PENDING_KEY:
            root.key = terminal_marker(root.failed)

    @staticmethod
    def _consume(series: Dict[str, Any], key: str) -> bool:
        """
        Remove a finished entry from the working copy

        Returns:
            False if the entry had already been consumed
        """
        if key not in series:
            return False
        del series[key]
        return True

    async def _call_hooks(self, hooks: List, label: str, *args: Any) -> None:
        for hook in hooks:
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(*args)
                else:
                    hook(*args)
            except Exception as e:
                # Log error but don't fail the run
                name = hook.__name__ if hasattr(hook, '__name__') else str(hook)
                logger.warning(f"{label} hook {name} failed: {str(e)}", exc_info=True)


def run(work_tree: Any, callback: CompletionCallback, diagnostics: Optional[Diagnostics] = None):
    """
    Run a series of units sequentially

    Args:
        work_tree: Mapping of key -> executable unit or nested mapping
        callback: ``callback(error, report)`` called once the tree is drained

    Returns:
        See SeriesRunner.run
    """
    return SeriesRunner(diagnostics=diagnostics).run(work_tree, callback)


async def run_series(work_tree: Any, diagnostics: Optional[Diagnostics] = None) -> Aggregate:
    """
    Run a series of units sequentially and return the root report

    Raises:
        WorkTreeError: If the root is not a mapping
    """
    return await SeriesRunner(diagnostics=diagnostics).execute(work_tree)


__all__ = [
    "SeriesRunner",
    "run",
    "run_series",
]

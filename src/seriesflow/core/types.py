"""
Core type definitions for seriesflow

This module contains the type aliases and constants shared by the execution
layer, the result model and the presentation helpers, so none of them has to
import the others just to name a callback or a state.
"""

from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple, Union


# ============================================================================
# Type Aliases
# ============================================================================

CompletionCallback = Callable[..., None]
"""
Completion callback handed to every executable unit.

Called as ``callback(error, value=None)``: a truthy ``error`` reports a
failure, otherwise ``value`` is the unit's result.

Example:
    def check_addition(callback):
        if 1 + 1 != 2:
            return callback("addition is broken")
        callback(None, "addition works")
"""

ExecutableUnit = Callable[[CompletionCallback], Union[None, Awaitable[None]]]
"""
A leaf of the work tree: a callable taking one completion callback.

Coroutine functions are accepted too; the returned awaitable is awaited, but
the unit still completes only when it calls the callback.
"""

WorkTree = Mapping[str, Any]
"""
Nested mapping of key -> executable unit or sub-tree. Mapping order is the
execution order.
"""

UnitPath = Tuple[str, ...]
"""Keys from the root of the work tree down to one unit"""

UnitPreHook = Callable[[UnitPath], Union[None, Awaitable[None]]]
"""
Hook called before a unit is invoked.

Example:
    async def announce(path):
        logger.info(f"running {'.'.join(path)}")
"""

UnitPostHook = Callable[[UnitPath, Any], Union[None, Awaitable[None]]]
"""
Hook called once a unit has signalled completion for the first time.
Receives the unit path and its Outcome.
"""

RunHook = Callable[..., Union[None, Awaitable[None]]]
"""Run lifecycle hook; receives the work tree or the final report"""


# ============================================================================
# Result State Constants
# ============================================================================

class ResultState:
    """
    Result state constants

    Every Outcome and Aggregate is in exactly one of these states. The state is
    derived from the ``succeeded``/``failed`` flags:

    - UNKNOWN: neither flag set (not run yet, or an empty group)
    - SUCCESS: succeeded only
    - FAILURE: failed only
    - INVALID: both flags set; only reachable through a duplicated callback
    """
    UNKNOWN = "unknown"
    SUCCESS = "success"
    FAILURE = "failure"
    INVALID = "invalid"

    @classmethod
    def from_flags(cls, succeeded: bool, failed: bool) -> str:
        """
        Derive the state from the two result flags

        Args:
            succeeded: Success flag
            failed: Failure flag

        Returns:
            One of the state constants
        """
        if succeeded and failed:
            return cls.INVALID
        if succeeded:
            return cls.SUCCESS
        if failed:
            return cls.FAILURE
        return cls.UNKNOWN

    @classmethod
    def is_settled(cls, state: str) -> bool:
        """True if the state can no longer move back to UNKNOWN"""
        return state in (cls.SUCCESS, cls.FAILURE, cls.INVALID)


# ============================================================================
# Root markers
# ============================================================================

# The root Aggregate starts with PENDING_KEY and is renamed to one of the
# terminal markers once the whole tree has been drained.
PENDING_KEY = "pending"
SUCCESS_KEY = "success"
FAILURE_KEY = "failure"

DUPLICATED_CALL_MESSAGE = "Duplicated call to callback"


def terminal_marker(failed: bool) -> str:
    """Terminal key for the root report"""
    return FAILURE_KEY if failed else SUCCESS_KEY


def describe_path(path: Optional[UnitPath]) -> str:
    """Dotted representation of a unit path, for logs"""
    return ".".join(path) if path else "<root>"


__all__ = [
    "CompletionCallback",
    "ExecutableUnit",
    "WorkTree",
    "UnitPath",
    "UnitPreHook",
    "UnitPostHook",
    "RunHook",
    "ResultState",
    "PENDING_KEY",
    "SUCCESS_KEY",
    "FAILURE_KEY",
    "DUPLICATED_CALL_MESSAGE",
    "terminal_marker",
    "describe_path",
]

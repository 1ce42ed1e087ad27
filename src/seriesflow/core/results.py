"""
Result model for seriesflow

Outcome records what one executable unit reported; Aggregate records the
derived result of one level of the work tree. Both expose the same
``key``/``succeeded``/``failed``/``state`` surface so that presentation code
can walk a report without caring which kind of node it holds.
"""

from typing import Any, Dict, Optional, Union
from seriesflow.core.types import (
    DUPLICATED_CALL_MESSAGE,
    ResultState,
    UnitPath,
)
from seriesflow.core.utils.formatting import format_result


class Outcome:
    """
    Result of one executable unit

    The unit's completion callback feeds ``settle()``. The first failure wins:
    once failed, later signals are dropped. A first success can only be
    overridden by a second signal, which is a contract violation:

    - second success -> INVALID (both flags set, fixed diagnostic message)
    - error after success -> FAILURE with the error as message
    """

    def __init__(self, key: str, path: Optional[UnitPath] = None, diagnostics=None):
        """
        Initialize Outcome

        Args:
            key: Key of the unit inside its group
            path: Full path of the unit, used in diagnostics
            diagnostics: Optional Diagnostics sink for contract violations
        """
        self.key = key
        self.path: UnitPath = path if path is not None else (key,)
        self.succeeded = False
        self.failed = False
        self.message: Any = None
        self.signals = 0
        self._diagnostics = diagnostics

    @property
    def state(self) -> str:
        return ResultState.from_flags(self.succeeded, self.failed)

    @property
    def settled(self) -> bool:
        return ResultState.is_settled(self.state)

    def settle(self, error: Any = None, value: Any = None) -> str:
        """
        Apply one completion signal

        Args:
            error: Error reported by the unit; any truthy value means failure
            value: Result value reported on success

        Returns:
            The state after the signal has been applied
        """
        self.signals += 1
        previous = self.state

        if previous == ResultState.UNKNOWN:
            if error:
                self.failed = True
                self.message = error
            else:
                self.succeeded = True
                self.message = value
        elif previous == ResultState.SUCCESS:
            if error:
                self.succeeded = False
                self.failed = True
                self.message = error
            else:
                self.failed = True
                self.message = DUPLICATED_CALL_MESSAGE
            self._report(
                ResultState.from_flags(self.succeeded, self.failed),
                f"Duplicated call to callback for {self.key}",
            )
        else:
            # Already failed or invalid: first failure wins
            self._report(previous, f"Callback for {self.key} already settled as {previous}, signal dropped")

        return self.state

    def _report(self, state: str, message: str) -> None:
        if self._diagnostics is None:
            return
        self._diagnostics.warning(message, self.path, state=state, signals=self.signals)

    @classmethod
    def invalid_value(cls, key: str, value: Any, path: Optional[UnitPath] = None) -> "Outcome":
        """
        Build the failure recorded for a work tree entry that is neither a
        mapping nor an executable unit
        """
        outcome = cls(key, path)
        outcome.settle(f"Key {key} has an invalid value {value!r}")
        return outcome

    def __repr__(self) -> str:
        return f"Outcome(key={self.key!r}, state={self.state!r}, message={self.message!r})"

    def __str__(self) -> str:
        return format_result(self)


class Aggregate:
    """
    Derived result of one level of the work tree

    Children are kept in completion order. ``failed`` is set as soon as any
    child has failed and is never cleared; ``succeeded`` needs at least one
    succeeded child and no failure. An Aggregate without children is neither.
    """

    def __init__(self, key: str):
        self.key = key
        self.succeeded = False
        self.failed = False
        self.results: Dict[str, Union[Outcome, "Aggregate"]] = {}

    @property
    def state(self) -> str:
        return ResultState.from_flags(self.succeeded, self.failed)

    def add(self, result: Union[Outcome, "Aggregate"]) -> None:
        """
        Insert or overwrite a child result and update the flags

        Args:
            result: Outcome or nested Aggregate
        """
        self.results[result.key] = result
        if result.succeeded and not self.failed:
            self.succeeded = True
        if result.failed:
            self.succeeded = False
            self.failed = True

    def get(self, key: str) -> Optional[Union[Outcome, "Aggregate"]]:
        return self.results.get(key)

    def __getitem__(self, key: str) -> Union[Outcome, "Aggregate"]:
        return self.results[key]

    def __contains__(self, key: str) -> bool:
        return key in self.results

    def __len__(self) -> int:
        return len(self.results)

    def count(self) -> Dict[str, int]:
        """
        Count leaf outcomes by state across the whole subtree

        Returns:
            Dictionary mapping every ResultState constant to a count
        """
        counts = {
            ResultState.SUCCESS: 0,
            ResultState.FAILURE: 0,
            ResultState.INVALID: 0,
            ResultState.UNKNOWN: 0,
        }
        for result in self.results.values():
            if isinstance(result, Aggregate):
                for state, amount in result.count().items():
                    counts[state] += amount
            else:
                counts[result.state] += 1
        return counts

    def __repr__(self) -> str:
        return f"Aggregate(key={self.key!r}, state={self.state!r}, results={list(self.results)!r})"

    def __str__(self) -> str:
        return format_result(self)


Result = Union[Outcome, Aggregate]


__all__ = [
    "Outcome",
    "Aggregate",
    "Result",
]

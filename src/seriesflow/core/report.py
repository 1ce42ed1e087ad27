"""
Serializable snapshot of a report

The live Outcome/Aggregate objects hold arbitrary payloads (exceptions, result
values). ResultSnapshot freezes a report into plain data so it can be dumped
as JSON by the CLI or compared in tests.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from seriesflow.core.results import Aggregate, Result


_JSON_NATIVE = (str, int, float, bool)


def _snapshot_message(message: Any) -> Any:
    if message is None or isinstance(message, _JSON_NATIVE):
        return message
    if isinstance(message, BaseException):
        return f"{message.__class__.__name__}: {message}"
    return str(message)


class ResultSnapshot(BaseModel):
    """Frozen view of an Outcome or Aggregate"""

    key: str
    state: str
    succeeded: bool = False
    failed: bool = False
    message: Optional[Any] = None
    results: Optional[Dict[str, "ResultSnapshot"]] = Field(default=None)

    @classmethod
    def from_result(cls, result: Result) -> "ResultSnapshot":
        """
        Build a snapshot from a live result tree

        Aggregates get a ``results`` mapping (in completion order), outcomes
        get a ``message`` rendered to a JSON-friendly value.
        """
        if isinstance(result, Aggregate):
            return cls(
                key=result.key,
                state=result.state,
                succeeded=result.succeeded,
                failed=result.failed,
                results={
                    key: cls.from_result(child)
                    for key, child in result.results.items()
                },
            )
        return cls(
            key=result.key,
            state=result.state,
            succeeded=result.succeeded,
            failed=result.failed,
            message=_snapshot_message(result.message),
        )

    @property
    def is_group(self) -> bool:
        return self.results is not None


ResultSnapshot.model_rebuild()


__all__ = ["ResultSnapshot"]

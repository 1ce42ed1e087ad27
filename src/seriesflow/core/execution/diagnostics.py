"""
Per-run diagnostics sink

Collects the errors and contract violations noticed while a work tree runs.
One instance belongs to one run, so separate runs never share error counts.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from seriesflow.core.types import UnitPath, describe_path
from seriesflow.core.utils.logger import get_logger

logger = get_logger(__name__)


class Diagnostics:
    """Records diagnostic events for a single run and forwards them to a logger"""

    ERROR = "error"
    WARNING = "warning"

    def __init__(self, run_logger=None):
        """
        Initialize Diagnostics

        Args:
            run_logger: Optional logger to forward events to (defaults to module logger)
        """
        self.logger = run_logger or logger
        self.events: List[Dict[str, Any]] = []
        self.errors = 0

    def record(self, level: str, message: str, path: Optional[UnitPath] = None, **kwargs):
        """
        Record one diagnostic event

        Args:
            level: Diagnostics.ERROR or Diagnostics.WARNING
            message: Human readable description
            path: Path of the unit the event refers to (None for run-level events)
            **kwargs: Additional event data
        """
        event = {
            "level": level,
            "message": message,
            "path": tuple(path) if path else (),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **kwargs
        }
        self.events.append(event)
        if level == self.ERROR:
            self.errors += 1
            self.logger.error(f"[{describe_path(path)}] {message}")
        else:
            self.logger.warning(f"[{describe_path(path)}] {message}")

    def error(self, message: str, path: Optional[UnitPath] = None, **kwargs):
        """Record an error event"""
        self.record(self.ERROR, message, path, **kwargs)

    def warning(self, message: str, path: Optional[UnitPath] = None, **kwargs):
        """Record a warning event"""
        self.record(self.WARNING, message, path, **kwargs)

    def get_errors(self) -> List[Dict[str, Any]]:
        """Get all error events"""
        return [event for event in self.events if event["level"] == self.ERROR]

    def get_warnings(self) -> List[Dict[str, Any]]:
        """Get all warning events"""
        return [event for event in self.events if event["level"] == self.WARNING]

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

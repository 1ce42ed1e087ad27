"""
Unified decorators for seriesflow

This module provides a single entry point for all decorators used in seriesflow.
Similar to Flask's app decorators (@app.before_request, @app.teardown_request),
it provides a clean API for registering hooks around units and runs.

Usage:
    from seriesflow import register_pre_hook, register_post_hook, register_run_hook

    @register_pre_hook
    async def announce(path):
        ...

    @register_post_hook
    def record(path, outcome):
        ...

    @register_run_hook("on_run_failed")
    def alert(report):
        ...
"""

from seriesflow.core.config import (
    register_pre_hook,
    register_post_hook,
    register_run_hook,
    clear_config,
)

__all__ = [
    "register_pre_hook",
    "register_post_hook",
    "register_run_hook",
    "clear_config",
]

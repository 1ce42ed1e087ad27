"""
Configuration and registry for global settings

This module provides a centralized way to manage global configuration like
unit hooks and run lifecycle hooks.

Instead of passing parameters through multiple layers, components can
access configuration through this module.
"""

from seriesflow.core.config.registry import (
    RUN_HOOK_TYPES,
    ConfigRegistry,
    get_config,
    register_pre_hook,
    register_post_hook,
    register_run_hook,
    get_pre_hooks,
    get_post_hooks,
    get_run_hooks,
    get_all_run_hooks,
    clear_config,
)

__all__ = [
    "RUN_HOOK_TYPES",
    "ConfigRegistry",
    "get_config",
    "register_pre_hook",
    "register_post_hook",
    "register_run_hook",
    "get_pre_hooks",
    "get_post_hooks",
    "get_run_hooks",
    "get_all_run_hooks",
    "clear_config",
]

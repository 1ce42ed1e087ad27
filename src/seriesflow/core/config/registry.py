"""
Global configuration registry for seriesflow

This module provides a centralized registry for the hooks that SeriesRunner
calls around units and runs. Components can access configuration without
passing parameters through multiple layers.
"""

from typing import Callable, Dict, List, Optional

from seriesflow.core.types import RunHook, UnitPostHook, UnitPreHook
from seriesflow.core.utils.logger import get_logger

logger = get_logger(__name__)

RUN_HOOK_TYPES = ("on_run_started", "on_run_completed", "on_run_failed")


def _hook_name(hook: Callable) -> str:
    return hook.__name__ if hasattr(hook, '__name__') else str(hook)


class ConfigRegistry:
    """
    Global configuration registry

    This class manages global configuration like:
    - Unit pre-execution hooks
    - Unit post-execution hooks
    - Run lifecycle hooks
    """

    def __init__(self):
        """Initialize empty registry"""
        self._pre_hooks: List[UnitPreHook] = []
        self._post_hooks: List[UnitPostHook] = []
        self._run_hooks: Dict[str, List[RunHook]] = {
            hook_type: [] for hook_type in RUN_HOOK_TYPES
        }

    def register_pre_hook(self, hook: UnitPreHook) -> None:
        """
        Register a pre-execution hook

        Args:
            hook: Pre-execution hook function (sync or async)
        """
        if hook not in self._pre_hooks:
            self._pre_hooks.append(hook)
            logger.debug(f"Registered pre-hook: {_hook_name(hook)}")

    def register_post_hook(self, hook: UnitPostHook) -> None:
        """
        Register a post-execution hook

        Args:
            hook: Post-execution hook function (sync or async)
        """
        if hook not in self._post_hooks:
            self._post_hooks.append(hook)
            logger.debug(f"Registered post-hook: {_hook_name(hook)}")

    def get_pre_hooks(self) -> List[UnitPreHook]:
        return self._pre_hooks.copy()

    def get_post_hooks(self) -> List[UnitPostHook]:
        return self._post_hooks.copy()

    def register_run_hook(self, hook_type: str, hook: RunHook) -> None:
        """
        Register a run lifecycle hook

        Args:
            hook_type: One of "on_run_started", "on_run_completed", "on_run_failed"
            hook: Hook function (sync or async)
                 on_run_started receives the work tree, the others the report

        Raises:
            ValueError: If hook_type is unknown
        """
        if hook_type not in self._run_hooks:
            raise ValueError(
                f"Invalid hook_type: {hook_type}. "
                f"Must be one of: {list(self._run_hooks.keys())}"
            )
        if hook not in self._run_hooks[hook_type]:
            self._run_hooks[hook_type].append(hook)
            logger.debug(f"Registered run hook '{hook_type}': {_hook_name(hook)}")

    def get_run_hooks(self, hook_type: str) -> List[RunHook]:
        """
        Get all registered run hooks for a specific hook type

        Args:
            hook_type: One of "on_run_started", "on_run_completed", "on_run_failed"

        Returns:
            List of hook functions
        """
        return self._run_hooks.get(hook_type, []).copy()

    def get_all_run_hooks(self) -> Dict[str, List[RunHook]]:
        return {hook_type: hooks.copy() for hook_type, hooks in self._run_hooks.items()}

    def clear(self) -> None:
        """Clear all configuration (useful for testing)"""
        self._pre_hooks.clear()
        self._post_hooks.clear()
        for hook_list in self._run_hooks.values():
            hook_list.clear()
        logger.debug("Cleared configuration registry")


# Global registry instance (singleton pattern)
_global_registry = ConfigRegistry()


def _get_registry() -> ConfigRegistry:
    return _global_registry


def get_config() -> ConfigRegistry:
    """
    Get the current configuration registry

    Returns:
        ConfigRegistry instance
    """
    return _get_registry()


def register_pre_hook(hook: Optional[UnitPreHook] = None) -> Callable:
    """
    Register a pre-execution hook using decorator syntax

    Can be used as a decorator:
        @register_pre_hook
        async def my_pre_hook(path):
            ...

    Or called directly:
        register_pre_hook(my_pre_hook)

    Args:
        hook: Pre-execution hook function (sync or async), or None when used as decorator

    Returns:
        Hook function
    """

    def decorator(func: UnitPreHook) -> UnitPreHook:
        _get_registry().register_pre_hook(func)
        return func

    if hook is None:
        return decorator
    _get_registry().register_pre_hook(hook)
    return hook


def register_post_hook(hook: Optional[UnitPostHook] = None) -> Callable:
    """
    Register a post-execution hook using decorator syntax

    Can be used as a decorator:
        @register_post_hook
        async def my_post_hook(path, outcome):
            ...

    Or called directly:
        register_post_hook(my_post_hook)
    """

    def decorator(func: UnitPostHook) -> UnitPostHook:
        _get_registry().register_post_hook(func)
        return func

    if hook is None:
        return decorator
    _get_registry().register_post_hook(hook)
    return hook


def register_run_hook(hook_type: str) -> Callable:
    """
    Register a run lifecycle hook using decorator syntax

    Usage:
        @register_run_hook("on_run_failed")
        def alert(report):
            ...

    Args:
        hook_type: One of "on_run_started", "on_run_completed", "on_run_failed"
    """

    def decorator(func: RunHook) -> RunHook:
        _get_registry().register_run_hook(hook_type, func)
        return func

    return decorator


def get_pre_hooks() -> List[UnitPreHook]:
    """Get all registered pre-execution hooks"""
    return _get_registry().get_pre_hooks()


def get_post_hooks() -> List[UnitPostHook]:
    """Get all registered post-execution hooks"""
    return _get_registry().get_post_hooks()


def get_run_hooks(hook_type: str) -> List[RunHook]:
    """Get all registered run hooks of one type"""
    return _get_registry().get_run_hooks(hook_type)


def get_all_run_hooks() -> Dict[str, List[RunHook]]:
    """Get all registered run hooks keyed by hook type"""
    return _get_registry().get_all_run_hooks()


def clear_config() -> None:
    """Clear all configuration (useful for testing)"""
    _get_registry().clear()

"""
Server-side state management.

The status API reads tasks through a TaskSource. By default that is a
TaskRegistry over the configured storage directory; the plugin host can
install its own live registry instead.
"""

from config import ApiConfig, get_config
from core import TaskRegistry, TaskSource


# =============================================================================
# Task Source
# =============================================================================

_task_source: TaskSource | None = None


def set_task_source(source: TaskSource | None) -> None:
    """Set the task source used by all routes (None resets to the default)."""
    global _task_source
    _task_source = source


def get_task_source() -> TaskSource:
    """Get the current task source, loading persisted tasks on first use."""
    global _task_source
    if _task_source is None:
        registry = TaskRegistry(get_config().resolved_storage_dir())
        registry.load()
        _task_source = registry
    return _task_source


# =============================================================================
# API Configuration
# =============================================================================


def get_api_config() -> ApiConfig:
    return get_config().api

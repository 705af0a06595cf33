"""Background task records: persistence, lookup and statistics."""

from .helpers import resolve_task_id, short_id, unique_short_id
from .registry import MessageFetcher, TaskRegistry, TaskSource
from .stats import build_group, build_stats
from .storage import (
    delete_persisted_task,
    delete_server_info,
    ensure_storage_dir,
    get_persisted_task,
    load_all_tasks,
    load_tasks,
    read_server_info,
    save_task,
    save_tasks,
    write_server_info,
)

__all__ = [
    # Registry
    "TaskRegistry",
    "TaskSource",
    "MessageFetcher",
    # Helpers
    "short_id",
    "unique_short_id",
    "resolve_task_id",
    # Stats
    "build_stats",
    "build_group",
    # Storage
    "ensure_storage_dir",
    "load_tasks",
    "save_tasks",
    "save_task",
    "get_persisted_task",
    "delete_persisted_task",
    "load_all_tasks",
    "write_server_info",
    "read_server_info",
    "delete_server_info",
]

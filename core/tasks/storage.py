"""Task storage for persisting background task records to disk.

Tasks live in a single tasks.json file mapping session ID to task. The
running status API advertises itself in server.json next to it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from config import get_config
from config.defaults import SERVER_INFO_FILENAME, TASKS_FILENAME

from ..models import BackgroundTask, ServerInfo

logger = logging.getLogger(__name__)


def default_storage_dir() -> Path:
    return get_config().resolved_storage_dir()


def ensure_storage_dir(storage_dir: Path | None = None) -> Path:
    """Ensure the storage directory exists.

    Args:
        storage_dir: Optional custom storage directory

    Returns:
        Path to the storage directory
    """
    target_dir = storage_dir or default_storage_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    return target_dir


def _write_json(path: Path, data: Any) -> None:
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(json.dumps(data, indent=2))
    os.replace(tmp_path, path)


def _read_json(path: Path) -> Any | None:
    """Parsed file content, or None when missing or unreadable."""
    try:
        return json.loads(path.read_text())
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def load_tasks(storage_dir: Path | None = None) -> dict[str, BackgroundTask]:
    """Load all persisted tasks.

    Returns an empty dict if the file doesn't exist or is corrupted. Individual
    records that fail validation are skipped.
    """
    target_dir = storage_dir or default_storage_dir()
    data = _read_json(target_dir / TASKS_FILENAME)
    if not isinstance(data, dict):
        return {}

    tasks: dict[str, BackgroundTask] = {}
    for session_id, record in data.items():
        if not isinstance(record, dict):
            continue
        try:
            tasks[session_id] = BackgroundTask(**{**record, "sessionID": session_id})
        except ValidationError as e:
            logger.warning("Skipping invalid task record %s: %s", session_id, e)
    return tasks


def save_tasks(tasks: dict[str, BackgroundTask], storage_dir: Path | None = None) -> Path:
    """Save all tasks, replacing the file atomically.

    Raises:
        OSError: If the file cannot be written
    """
    target_dir = ensure_storage_dir(storage_dir)
    path = target_dir / TASKS_FILENAME
    payload = {
        session_id: task.model_dump(mode="json", exclude_none=True)
        for session_id, task in tasks.items()
    }
    try:
        _write_json(path, payload)
    except OSError as e:
        logger.error("Failed to save tasks to %s: %s", path, e)
        raise
    return path


def save_task(task: BackgroundTask, storage_dir: Path | None = None) -> None:
    """Save a single task (read-modify-write)."""
    tasks = load_tasks(storage_dir)
    tasks[task.sessionID] = task
    save_tasks(tasks, storage_dir)


def get_persisted_task(
    session_id: str, storage_dir: Path | None = None
) -> BackgroundTask | None:
    return load_tasks(storage_dir).get(session_id)


def delete_persisted_task(session_id: str, storage_dir: Path | None = None) -> bool:
    """Delete a single task.

    Returns:
        True if the task was deleted, False if not found
    """
    tasks = load_tasks(storage_dir)
    if session_id not in tasks:
        return False
    del tasks[session_id]
    save_tasks(tasks, storage_dir)
    return True


def load_all_tasks(storage_dir: Path | None = None) -> list[BackgroundTask]:
    return list(load_tasks(storage_dir).values())


# =============================================================================
# Server Info (server.json)
# =============================================================================


def write_server_info(info: ServerInfo, storage_dir: Path | None = None) -> Path:
    """Advertise the running status API.

    Raises:
        OSError: If the file cannot be written
    """
    target_dir = ensure_storage_dir(storage_dir)
    path = target_dir / SERVER_INFO_FILENAME
    _write_json(path, info.model_dump(mode="json"))
    logger.info("Wrote server info to %s", path)
    return path


def read_server_info(storage_dir: Path | None = None) -> ServerInfo | None:
    target_dir = storage_dir or default_storage_dir()
    data = _read_json(target_dir / SERVER_INFO_FILENAME)
    if not isinstance(data, dict):
        return None
    try:
        return ServerInfo(**data)
    except ValidationError as e:
        logger.warning("Ignoring invalid server info: %s", e)
        return None


def delete_server_info(storage_dir: Path | None = None) -> None:
    target_dir = storage_dir or default_storage_dir()
    (target_dir / SERVER_INFO_FILENAME).unlink(missing_ok=True)

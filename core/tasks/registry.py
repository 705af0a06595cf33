"""
Background task registry.

Keeps task records in memory, persists every change to tasks.json and
publishes task events for the status API. Launching and driving the child
sessions themselves is the host runtime's job; it reports back through
``upsert`` and ``set_status``.
"""

import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Protocol

from ..events import Event, EventBus, NullEventBus, TaskEventType
from ..exceptions import NotFoundError
from ..models import BackgroundTask, TaskStatus, utc_now_iso
from . import storage
from .helpers import resolve_task_id

logger = logging.getLogger(__name__)

MessageFetcher = Callable[[str], Awaitable[list[dict[str, Any]]]]

_STATUS_EVENTS: dict[str, TaskEventType] = {
    "completed": "task.completed",
    "error": "task.error",
    "cancelled": "task.cancelled",
}


class TaskSource(Protocol):
    """Read access to tasks, as needed by the status API."""

    def get_all_tasks(self) -> list[BackgroundTask]: ...

    def get_task(self, task_id: str) -> BackgroundTask | None: ...

    async def get_task_messages(self, task_id: str) -> list[Any]: ...


class TaskRegistry:
    """In-memory task records backed by tasks.json."""

    def __init__(
        self,
        storage_dir: Path | None = None,
        event_bus: EventBus | None = None,
        message_fetcher: MessageFetcher | None = None,
    ) -> None:
        self.storage_dir = storage_dir
        self.event_bus: EventBus = event_bus or NullEventBus()
        self.message_fetcher = message_fetcher
        self._tasks: dict[str, BackgroundTask] = {}

    def load(self) -> int:
        """Load persisted tasks into memory; returns how many were loaded."""
        self._tasks = storage.load_tasks(self.storage_dir)
        logger.info("Loaded %d persisted tasks", len(self._tasks))
        return len(self._tasks)

    def get_all_tasks(self) -> list[BackgroundTask]:
        return list(self._tasks.values())

    def resolve_task_id(self, id_or_prefix: str) -> str | None:
        """Resolve a full or short ID, checking disk when memory has no match."""
        resolved = resolve_task_id(id_or_prefix, self._tasks.keys())
        if resolved:
            return resolved
        return resolve_task_id(id_or_prefix, storage.load_tasks(self.storage_dir).keys())

    def get_task(self, task_id: str) -> BackgroundTask | None:
        """Look a task up by full or short ID, in memory then on disk."""
        resolved = self.resolve_task_id(task_id)
        if resolved is None:
            return None
        task = self._tasks.get(resolved)
        if task is None:
            task = storage.get_persisted_task(resolved, self.storage_dir)
        return task

    async def get_task_messages(self, task_id: str) -> list[Any]:
        """Fetch the child session's messages from the host, if a fetcher is set."""
        if self.message_fetcher is None:
            return []
        return await self.message_fetcher(task_id)

    async def upsert(self, task: BackgroundTask) -> BackgroundTask:
        """Store a new or changed task, persist it and announce it."""
        event_type = "task.updated" if task.sessionID in self._tasks else "task.created"
        self._tasks[task.sessionID] = task
        storage.save_task(task, self.storage_dir)
        await self._publish(event_type, task)
        return task

    async def set_status(
        self, task_id: str, status: TaskStatus, error: str | None = None
    ) -> BackgroundTask:
        """
        Change a task's status.

        Terminal statuses stamp ``completedAt``. The change is persisted and a
        terminal event is published only when the status actually changed.

        Raises:
            NotFoundError: If the task is unknown
        """
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)

        previous = task.status
        update: dict[str, Any] = {"status": status}
        if status in _STATUS_EVENTS:
            update["completedAt"] = utc_now_iso()
        if error:
            update["error"] = error

        task = task.model_copy(update=update)
        self._tasks[task.sessionID] = task
        storage.save_task(task, self.storage_dir)

        if previous != status and status in _STATUS_EVENTS:
            await self._publish(_STATUS_EVENTS[status], task)
        return task

    async def _publish(self, event_type: TaskEventType, task: BackgroundTask) -> None:
        await self.event_bus.publish(
            Event(type=event_type, properties={"task": task.model_dump(mode="json")})
        )

"""
Task list, detail and log endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from core import BackgroundTask
from core.models import utc_now_iso

from ..logging_config import timed
from ..state import get_api_config, get_task_source


logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_SORT = "startedAt:desc"


class PaginatedTasksResponse(BaseModel):
    tasks: list[BackgroundTask]
    total: int
    limit: int
    offset: int


class TaskLogsResponse(BaseModel):
    messages: list[Any]
    taskId: str
    retrievedAt: str


def parse_int(value: str | None, default: int) -> int:
    """Parse a query value, falling back to ``default`` when absent or invalid."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _sort_key(field: str):
    def key(task: BackgroundTask) -> Any:
        value = getattr(task, field, None)
        if value is None or isinstance(value, BaseModel):
            return ""
        return value

    return key


def filter_tasks(
    tasks: list[BackgroundTask],
    status: str | None = None,
    agent: str | None = None,
    search: str | None = None,
) -> list[BackgroundTask]:
    """Filter by exact status/agent and case-insensitive description/prompt search."""
    if status:
        tasks = [t for t in tasks if t.status == status]
    if agent:
        tasks = [t for t in tasks if t.agent == agent]
    if search:
        needle = search.lower()
        tasks = [
            t
            for t in tasks
            if needle in t.description.lower() or needle in t.prompt.lower()
        ]
    return tasks


def sort_tasks(tasks: list[BackgroundTask], sort: str) -> list[BackgroundTask]:
    """Sort by ``field:asc|desc``; unknown fields leave the order unchanged."""
    field, _, direction = sort.partition(":")
    if field not in BackgroundTask.model_fields:
        return tasks
    try:
        return sorted(tasks, key=_sort_key(field), reverse=direction != "asc")
    except TypeError:
        logger.debug("Cannot sort tasks by %s", field)
        return tasks


@router.get("/v1/tasks")
async def list_tasks(
    status: str | None = Query(None),
    agent: str | None = Query(None),
    search: str | None = Query(None),
    sort: str = Query(DEFAULT_SORT),
    limit: str | None = Query(None),
    offset: str | None = Query(None),
) -> PaginatedTasksResponse:
    """List tasks with filtering, sorting and pagination."""
    api_config = get_api_config()

    page_size = parse_int(limit, api_config.default_task_limit)
    if page_size < 1:
        page_size = api_config.default_task_limit
    page_size = min(page_size, api_config.max_task_limit)

    start = parse_int(offset, 0)
    if start < 0:
        start = 0

    tasks = filter_tasks(get_task_source().get_all_tasks(), status, agent, search)
    tasks = sort_tasks(tasks, sort or DEFAULT_SORT)

    return PaginatedTasksResponse(
        tasks=tasks[start:start + page_size],
        total=len(tasks),
        limit=page_size,
        offset=start,
    )


@router.get("/v1/tasks/{task_id}")
async def get_task(task_id: str) -> BackgroundTask:
    """Get a task by full or short ID."""
    task = get_task_source().get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.get("/v1/tasks/{task_id}/logs")
@timed("fetch_task_messages")
async def get_task_logs(task_id: str) -> TaskLogsResponse:
    """Get the child session's messages for a task."""
    source = get_task_source()
    task = source.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")

    messages = await source.get_task_messages(task.sessionID)
    return TaskLogsResponse(
        messages=messages,
        taskId=task.sessionID,
        retrievedAt=utc_now_iso(),
    )

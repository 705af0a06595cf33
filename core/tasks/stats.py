"""Aggregate statistics over background tasks."""

from typing import Iterable

from ..models import BackgroundTask, DurationStats, TaskGroup, TaskGroupStats, TaskStats
from ..models.utils import parse_iso


def _duration_ms(task: BackgroundTask) -> float | None:
    start = parse_iso(task.startedAt)
    end = parse_iso(task.completedAt)
    if start is None or end is None:
        return None
    return (end - start).total_seconds() * 1000


def _add_counts(target: dict[str, int], source: dict[str, int]) -> None:
    for name, count in source.items():
        target[name] = target.get(name, 0) + count


def build_stats(tasks: Iterable[BackgroundTask]) -> TaskStats:
    """Counts by status and agent, tool call totals and finished-task durations."""
    stats = TaskStats()
    durations: list[float] = []

    for task in tasks:
        stats.totalTasks += 1
        stats.byStatus[task.status] = stats.byStatus.get(task.status, 0) + 1
        stats.byAgent[task.agent] = stats.byAgent.get(task.agent, 0) + 1

        if task.progress:
            _add_counts(stats.toolCallsByName, task.progress.toolCallsByName)
        if task.tool_calls > 0:
            stats.toolCallsByAgent[task.agent] = (
                stats.toolCallsByAgent.get(task.agent, 0) + task.tool_calls
            )
        if task.is_active:
            stats.activeTasks += 1

        duration = _duration_ms(task)
        if duration is not None and duration > 0:
            durations.append(duration)

    if durations:
        stats.duration = DurationStats(
            avg=sum(durations) / len(durations),
            max=max(durations),
            min=min(durations),
        )
    return stats


def build_group(group_id: str, tasks: Iterable[BackgroundTask]) -> TaskGroup | None:
    """
    Summarise the tasks launched together under one batch ID.

    Returns:
        The group, or None when no task carries the batch ID
    """
    members = [t for t in tasks if t.batchId == group_id]
    if not members:
        return None

    stats = TaskGroupStats(total=len(members))
    starts = []
    ends = []
    for task in members:
        if task.status == "completed":
            stats.completed += 1
        elif task.is_active:
            stats.running += 1
        elif task.status == "error":
            stats.error += 1
        elif task.status == "cancelled":
            stats.cancelled += 1

        stats.totalToolCalls += task.tool_calls
        if task.progress:
            _add_counts(stats.toolCallsByName, task.progress.toolCallsByName)
        if task.tool_calls > 0:
            stats.toolCallsByAgent[task.agent] = (
                stats.toolCallsByAgent.get(task.agent, 0) + task.tool_calls
            )

        start = parse_iso(task.startedAt)
        if start is not None:
            starts.append(start)
        end = parse_iso(task.completedAt)
        if end is not None:
            ends.append(end)

    stats.completionRate = stats.completed / stats.total
    if starts and ends:
        stats.duration = max((max(ends) - min(starts)).total_seconds() * 1000, 0)

    return TaskGroup(groupId=group_id, tasks=members, stats=stats)

"""
Task event SSE endpoint.
"""

import asyncio
import json
from typing import Any, AsyncGenerator

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from core import TaskSource, build_stats
from core.models import utc_now_iso

from ..event_bus import SSEEventBus, get_event_bus
from ..state import get_api_config, get_task_source


router = APIRouter()


def snapshot_event(source: TaskSource) -> dict[str, str]:
    tasks = source.get_all_tasks()
    data = {
        "tasks": [task.model_dump(mode="json") for task in tasks],
        "stats": build_stats(tasks).model_dump(mode="json"),
    }
    return {"event": "snapshot", "data": json.dumps(data)}


async def event_stream(
    event_bus: SSEEventBus,
    queue: asyncio.Queue[dict[str, Any]],
    source: TaskSource,
    heartbeat_interval: float,
) -> AsyncGenerator[dict[str, str], None]:
    """
    Snapshot first, then task events as they are published.

    A heartbeat is sent whenever no event arrives within ``heartbeat_interval``
    seconds. The queue is unsubscribed when the client goes away.
    """
    try:
        yield snapshot_event(source)
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_interval)
            except asyncio.TimeoutError:
                yield {"event": "heartbeat", "data": json.dumps({"ts": utc_now_iso()})}
                continue
            yield {"event": event["type"], "data": json.dumps(event["properties"])}
    finally:
        event_bus.unsubscribe(queue)


async def rejection_stream() -> AsyncGenerator[dict[str, str], None]:
    yield {"event": "error", "data": json.dumps({"error": "Too many connections"})}


@router.get("/v1/events")
async def task_events() -> EventSourceResponse:
    """Subscribe to task events via SSE."""
    event_bus = get_event_bus()
    queue = event_bus.subscribe()
    if queue is None:
        return EventSourceResponse(rejection_stream())

    return EventSourceResponse(
        event_stream(
            event_bus,
            queue,
            get_task_source(),
            get_api_config().heartbeat_interval,
        )
    )

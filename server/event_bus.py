"""
SSE-based EventBus implementation.

This module provides the server-side implementation of the EventBus protocol,
fanning task events out to connected /v1/events streams.
"""

import asyncio
import logging
from typing import Any

from config.defaults import MAX_SSE_SUBSCRIBERS
from core import Event

logger = logging.getLogger(__name__)


class SSEEventBus:
    """
    EventBus implementation that broadcasts events to SSE subscribers.

    Each subscriber gets a queue that receives events. The events endpoint
    consumes from these queues to stream events to clients. The number of
    concurrent subscribers is capped.
    """

    def __init__(self, max_subscribers: int = MAX_SSE_SUBSCRIBERS) -> None:
        self.max_subscribers = max_subscribers
        self.subscribers: list[asyncio.Queue[dict[str, Any]]] = []

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers."""
        data = event.model_dump(mode="json")
        for queue in list(self.subscribers):
            await queue.put(data)

    def subscribe(self) -> asyncio.Queue[dict[str, Any]] | None:
        """
        Create a new subscription queue.

        Returns:
            A queue that will receive all published events, or None when the
            subscriber limit is reached
        """
        if len(self.subscribers) >= self.max_subscribers:
            logger.warning(
                "Rejecting SSE subscriber: limit of %d reached", self.max_subscribers
            )
            return None
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[dict[str, Any]]) -> None:
        """
        Remove a subscription queue.

        Args:
            queue: The queue to unsubscribe
        """
        if queue in self.subscribers:
            self.subscribers.remove(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self.subscribers)


# Global event bus instance
_event_bus: SSEEventBus | None = None


def get_event_bus() -> SSEEventBus:
    """Get the global event bus instance, creating it if necessary."""
    global _event_bus
    if _event_bus is None:
        _event_bus = SSEEventBus()
    return _event_bus


def set_event_bus(event_bus: SSEEventBus | None) -> None:
    """Replace the global event bus (None resets to a fresh one on next use)."""
    global _event_bus
    _event_bus = event_bus

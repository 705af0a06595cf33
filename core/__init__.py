"""
Core business logic package.

This package contains transport-agnostic logic for the async agents plugin:
the fork context pipeline and background task records. The server package
provides HTTP bindings around these core operations.
"""

from .events import Event, EventBus, NullEventBus, TaskEventType
from .exceptions import CoreError, NotFoundError
from .fork import (
    ForkContext,
    ForkPipeline,
    build_fork_context,
    build_fork_preamble,
    process_for_fork,
    render_context,
)
from .models import (
    BackgroundTask,
    CompactionPart,
    Message,
    MessageInfo,
    Part,
    ProcessingStats,
    ServerInfo,
    TaskProgress,
    TaskStatus,
    TextPart,
    TierDistribution,
    ToolPart,
    ToolResultPart,
    UnknownPart,
)
from .tasks import TaskRegistry, TaskSource, build_group, build_stats

__all__ = [
    # Exceptions
    "CoreError",
    "NotFoundError",
    # Events
    "Event",
    "EventBus",
    "NullEventBus",
    "TaskEventType",
    # Models
    "Message",
    "MessageInfo",
    "Part",
    "TextPart",
    "CompactionPart",
    "ToolPart",
    "ToolResultPart",
    "UnknownPart",
    "ProcessingStats",
    "TierDistribution",
    "BackgroundTask",
    "TaskProgress",
    "TaskStatus",
    "ServerInfo",
    # Fork operations
    "ForkPipeline",
    "ForkContext",
    "process_for_fork",
    "render_context",
    "build_fork_context",
    "build_fork_preamble",
    # Task operations
    "TaskRegistry",
    "TaskSource",
    "build_stats",
    "build_group",
]

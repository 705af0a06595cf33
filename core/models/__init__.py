"""
Domain models for the async agents plugin.

These are the core data structures used throughout the application.
"""

from .message import Message, MessageInfo, coerce_messages
from .part import (
    CompactionPart,
    Part,
    TextPart,
    ToolInput,
    ToolPart,
    ToolResultPart,
    UnknownPart,
    parse_part,
)
from .processing_stats import NO_BOUNDARY, ProcessingStats, TierDistribution
from .server_info import ServerInfo
from .task import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    BackgroundTask,
    TaskProgress,
    TaskStatus,
)
from .task_stats import DurationStats, TaskGroup, TaskGroupStats, TaskStats
from .utils import utc_now_iso

__all__ = [
    # Utils
    "utc_now_iso",
    # Message models
    "Message",
    "MessageInfo",
    "coerce_messages",
    # Part models
    "TextPart",
    "CompactionPart",
    "ToolInput",
    "ToolPart",
    "ToolResultPart",
    "UnknownPart",
    "Part",
    "parse_part",
    # Fork statistics
    "NO_BOUNDARY",
    "ProcessingStats",
    "TierDistribution",
    # Task models
    "TaskStatus",
    "TaskProgress",
    "BackgroundTask",
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
    "TaskStats",
    "TaskGroup",
    "TaskGroupStats",
    "DurationStats",
    # Discovery
    "ServerInfo",
]

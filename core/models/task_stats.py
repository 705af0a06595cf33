"""Aggregate task statistics models."""

from pydantic import BaseModel, Field

from .task import BackgroundTask


class DurationStats(BaseModel):
    """Durations of finished tasks in milliseconds."""

    avg: float = 0
    max: float = 0
    min: float = 0


class TaskStats(BaseModel):
    byStatus: dict[str, int] = Field(default_factory=dict)
    byAgent: dict[str, int] = Field(default_factory=dict)
    toolCallsByName: dict[str, int] = Field(default_factory=dict)
    toolCallsByAgent: dict[str, int] = Field(default_factory=dict)
    duration: DurationStats = Field(default_factory=DurationStats)
    totalTasks: int = 0
    activeTasks: int = 0


class TaskGroupStats(BaseModel):
    completed: int = 0
    running: int = 0
    error: int = 0
    cancelled: int = 0
    total: int = 0
    completionRate: float = Field(default=0, description="Completed share, 0-1")
    totalToolCalls: int = 0
    toolCallsByName: dict[str, int] = Field(default_factory=dict)
    toolCallsByAgent: dict[str, int] = Field(default_factory=dict)
    duration: float = Field(default=0, description="First start to last completion, ms")


class TaskGroup(BaseModel):
    groupId: str
    tasks: list[BackgroundTask]
    stats: TaskGroupStats

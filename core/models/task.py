"""Background task models."""

from typing import Literal

from pydantic import BaseModel, Field

TaskStatus = Literal["running", "completed", "error", "cancelled", "resumed"]

TERMINAL_STATUSES: frozenset[str] = frozenset({"completed", "error", "cancelled"})
ACTIVE_STATUSES: frozenset[str] = frozenset({"running", "resumed"})


class TaskProgress(BaseModel):
    toolCalls: int = 0
    toolCallsByName: dict[str, int] = Field(default_factory=dict)
    lastTools: list[str] = Field(default_factory=list)
    lastUpdate: str | None = None


class BackgroundTask(BaseModel):
    """A child session launched in the background, keyed by its session ID.

    Field names follow the plugin's tasks.json format.
    """

    sessionID: str
    parentSessionID: str | None = None
    parentMessageID: str | None = None
    parentAgent: str | None = None
    description: str = ""
    prompt: str = ""
    agent: str = "general"
    status: TaskStatus = "running"
    startedAt: str
    completedAt: str | None = None
    error: str | None = None
    batchId: str | None = None
    isForked: bool = False
    resumeCount: int = 0
    progress: TaskProgress | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def tool_calls(self) -> int:
        return self.progress.toolCalls if self.progress else 0

"""ApiConfig model."""

from pydantic import BaseModel, Field

from .defaults import (
    DEFAULT_API_ENABLED,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_TASK_LIMIT,
    HEARTBEAT_INTERVAL_SECONDS,
    MAX_PORT_RETRY,
    MAX_SSE_SUBSCRIBERS,
    MAX_TASK_LIMIT,
)


class ApiConfig(BaseModel):
    """HTTP status API configuration."""

    enabled: bool = Field(
        default=DEFAULT_API_ENABLED, description="Start the status API server"
    )
    host: str = Field(default=DEFAULT_API_HOST, description="Bind address")
    port: int = Field(
        default=DEFAULT_API_PORT, ge=0, le=65535, description="Preferred port"
    )
    max_port_retry: int = Field(
        default=MAX_PORT_RETRY,
        ge=0,
        description="Consecutive ports tried before falling back to an OS-assigned one",
    )
    heartbeat_interval: float = Field(
        default=HEARTBEAT_INTERVAL_SECONDS,
        gt=0,
        description="Seconds of SSE idle time before a heartbeat event",
    )
    max_sse_subscribers: int = Field(
        default=MAX_SSE_SUBSCRIBERS, gt=0, description="Concurrent SSE stream limit"
    )
    default_task_limit: int = Field(
        default=DEFAULT_TASK_LIMIT, gt=0, description="Page size for task listings"
    )
    max_task_limit: int = Field(
        default=MAX_TASK_LIMIT, gt=0, description="Largest accepted page size"
    )

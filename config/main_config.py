"""Main Config model."""

from pathlib import Path

from pydantic import BaseModel, Field

from .api_config import ApiConfig
from .defaults import STORAGE_SUBDIR
from .fork_config import ForkConfig


class Config(BaseModel):
    """Main configuration model."""

    fork: ForkConfig = Field(
        default_factory=ForkConfig,
        description="Fork context truncation settings",
    )
    api: ApiConfig = Field(
        default_factory=ApiConfig,
        description="HTTP status API settings",
    )
    storage_dir: str | None = Field(
        default=None,
        description="Directory for tasks.json and server.json",
    )

    def resolved_storage_dir(self) -> Path:
        """Storage directory with ~ expanded, falling back to the default."""
        if self.storage_dir:
            return Path(self.storage_dir).expanduser()
        return Path.home() / STORAGE_SUBDIR

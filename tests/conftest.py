"""
Shared pytest fixtures for all tests.
"""
from pathlib import Path
from typing import Iterator

import pytest

from config import get_config
from core.fork import get_default_pipeline
from server import set_event_bus, set_task_source


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch) -> Iterator[Path]:
    """Point HOME and the working directory at a temp dir and reset cached state."""
    home = tmp_path / "home"
    home.mkdir()
    project = tmp_path / "project"
    project.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    for name in (
        "ASYNCAGENTS_API_ENABLED",
        "ASYNCAGENTS_API_HOST",
        "ASYNCAGENTS_API_PORT",
        "ASYNCAGENTS_STORAGE_DIR",
    ):
        monkeypatch.delenv(name, raising=False)

    get_config.cache_clear()
    get_default_pipeline.cache_clear()
    set_task_source(None)
    set_event_bus(None)
    yield project
    get_config.cache_clear()
    get_default_pipeline.cache_clear()
    set_task_source(None)
    set_event_bus(None)


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """Task storage directory for testing."""
    path = tmp_path / "storage"
    path.mkdir()
    return path

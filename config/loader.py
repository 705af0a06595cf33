"""Configuration loading utilities."""

import json
import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from .main_config import Config

logger = logging.getLogger(__name__)

CONFIG_BASENAME = "async-agents"

# Environment variable names
API_ENABLED_ENV = "ASYNCAGENTS_API_ENABLED"
API_HOST_ENV = "ASYNCAGENTS_API_HOST"
API_PORT_ENV = "ASYNCAGENTS_API_PORT"
STORAGE_DIR_ENV = "ASYNCAGENTS_STORAGE_DIR"


def strip_jsonc_comments(content: str) -> str:
    """
    Strip comments from JSONC content to convert to valid JSON.

    Handles:
    - Single-line comments: // comment (not URL schemes like http://)
    - Multi-line comments: /* comment */

    Args:
        content: JSONC content string

    Returns:
        JSON string with comments removed
    """
    content = re.sub(r"(?<!:)//.*?$", "", content, flags=re.MULTILINE)
    content = re.sub(r"/\*.*?\*/", "", content, flags=re.DOTALL)
    return content


def load_config_file(path: Path) -> dict[str, Any] | None:
    """
    Load a config file from the given path.

    Supports both .json and .jsonc files with comment stripping.

    Args:
        path: Path to the config file

    Returns:
        Parsed config dictionary or None if file doesn't exist or is invalid
    """
    if not path.exists():
        return None

    try:
        content = path.read_text()
        if path.suffix == ".jsonc":
            content = strip_jsonc_comments(content)
        data = json.loads(content)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level must be an object", path)
        return None
    return data


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two configuration dictionaries.

    Args:
        base: Base configuration
        override: Override configuration (takes precedence)

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def env_overrides(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Collect config overrides from ASYNCAGENTS_* environment variables.

    Unparseable ports are ignored with a warning.
    """
    env = os.environ if environ is None else environ
    api: dict[str, Any] = {}
    overrides: dict[str, Any] = {}

    enabled = env.get(API_ENABLED_ENV)
    if enabled is not None:
        api["enabled"] = enabled.strip().lower() != "false"

    host = env.get(API_HOST_ENV)
    if host:
        api["host"] = host

    port = env.get(API_PORT_ENV)
    if port:
        try:
            api["port"] = int(port)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", API_PORT_ENV, port)

    storage_dir = env.get(STORAGE_DIR_ENV)
    if storage_dir:
        overrides["storage_dir"] = storage_dir

    if api:
        overrides["api"] = api
    return overrides


def load_config(project_root: Path | None = None) -> Config:
    """
    Load configuration from multiple sources with precedence.

    Sources, lowest precedence first:
    1. Global: ~/.opencode/async-agents.jsonc
    2. Project-level: async-agents.jsonc, async-agents.json,
       .opencode/async-agents.jsonc (first one found)
    3. ASYNCAGENTS_* environment variables

    Args:
        project_root: Project root directory (defaults to current working directory)

    Returns:
        Loaded and merged Config model
    """
    if project_root is None:
        project_root = Path.cwd()

    global_config_path = Path.home() / ".opencode" / f"{CONFIG_BASENAME}.jsonc"
    config_data = load_config_file(global_config_path) or {}

    project_config_paths = [
        project_root / f"{CONFIG_BASENAME}.jsonc",
        project_root / f"{CONFIG_BASENAME}.json",
        project_root / ".opencode" / f"{CONFIG_BASENAME}.jsonc",
    ]

    for path in project_config_paths:
        project_config = load_config_file(path)
        if project_config:
            config_data = merge_configs(config_data, project_config)
            break

    config_data = merge_configs(config_data, env_overrides())

    return Config(**config_data)


@lru_cache(maxsize=1)
def get_config(project_root: Path | None = None) -> Config:
    """
    Get cached configuration.

    This function caches the config to avoid repeated file I/O.
    To reload the config, clear the cache with get_config.cache_clear().

    Args:
        project_root: Project root directory (defaults to current working directory)

    Returns:
        Cached Config model
    """
    return load_config(project_root or Path.cwd())

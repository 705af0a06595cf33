"""
Configuration module for the async agents plugin.

Exports the configuration models and loader functions used throughout the application.
"""

from .api_config import ApiConfig
from .fork_config import ForkConfig
from .loader import (
    env_overrides,
    get_config,
    load_config,
    load_config_file,
    merge_configs,
    strip_jsonc_comments,
)
from .main_config import Config

__all__ = [
    # Config models
    "Config",
    "ForkConfig",
    "ApiConfig",
    # Loader functions
    "load_config",
    "get_config",
    "load_config_file",
    "merge_configs",
    "strip_jsonc_comments",
    "env_overrides",
]

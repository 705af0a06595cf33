"""
Tests for the configuration system.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from config import (
    ApiConfig,
    Config,
    ForkConfig,
    env_overrides,
    get_config,
    load_config,
    load_config_file,
    merge_configs,
    strip_jsonc_comments,
)


class TestStripJSONComments:
    """Test JSONC comment stripping."""

    def test_single_line_comments(self):
        """Test that single-line comments are stripped."""
        jsonc = """
        {
            // This is a comment
            "key": "value"
        }
        """
        result = strip_jsonc_comments(jsonc)
        assert json.loads(result) == {"key": "value"}

    def test_multi_line_comments(self):
        """Test that multi-line comments are stripped."""
        jsonc = """
        {
            /* This is a
               multi-line comment */
            "key": "value"
        }
        """
        result = strip_jsonc_comments(jsonc)
        assert "/*" not in result
        assert json.loads(result) == {"key": "value"}

    def test_urls_preserved(self):
        """Test that URL schemes are not mistaken for comments."""
        jsonc = '{"url": "http://localhost:5165"}  // status API'
        result = strip_jsonc_comments(jsonc)
        assert json.loads(result) == {"url": "http://localhost:5165"}


class TestForkConfig:
    """Test fork configuration defaults and validation."""

    def test_defaults(self):
        """Test default budget and tier values."""
        config = ForkConfig()

        assert config.char_budget == 200_000
        assert config.no_removal_threshold == 120_000
        assert config.tier1_count == 5
        assert config.tier2_count == 10
        assert config.tier2_limit == 3000
        assert config.tier3_limit == 500
        assert (config.params_tier1, config.params_tier2, config.params_tier3) == (500, 200, 100)
        assert (config.head_ratio, config.tail_ratio) == (0.8, 0.2)
        assert "ask_user_questions" in config.no_truncation_tools
        assert "bash" in config.head_tail_keywords
        assert config.compacted_sentinel == "[Old tool result content cleared]"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"tier2_limit": 100, "tier3_limit": 500},
            {"params_tier1": 100, "params_tier2": 200},
            {"head_ratio": 0.9, "tail_ratio": 0.2},
            {"no_removal_threshold": 300_000},
            {"tier1_count": -1},
            {"char_budget": 0},
            {"compacted_sentinel": ""},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        """Test inconsistent settings raise at construction."""
        with pytest.raises(ValidationError):
            ForkConfig(**overrides)

    def test_tier_limits(self):
        """Test per-tier caps."""
        config = ForkConfig()

        assert config.tier_limit(1) is None
        assert config.tier_limit(2) == 3000
        assert config.tier_limit(3) == 500
        assert config.params_limit(1) == 500
        assert config.params_limit(2) == 200
        assert config.params_limit(3) == 100
        assert config.params_limit(None) == 100


class TestConfig:
    """Test the main config model."""

    def test_defaults(self):
        """Test the default config."""
        config = Config()

        assert isinstance(config.fork, ForkConfig)
        assert isinstance(config.api, ApiConfig)
        assert config.api.port == 5165
        assert config.api.host == "127.0.0.1"
        assert config.api.enabled is True

    def test_default_storage_dir_under_home(self):
        """Test the storage directory defaults to the plugin dir in HOME."""
        expected = Path.home() / ".opencode" / "plugins" / "async-agents"

        assert Config().resolved_storage_dir() == expected

    def test_storage_dir_expands_user(self):
        """Test a configured storage directory has ~ expanded."""
        config = Config(storage_dir="~/tasks")

        assert config.resolved_storage_dir() == Path.home() / "tasks"

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            ApiConfig(port=70000)


class TestLoadConfigFile:
    """Test single config file loading."""

    def test_missing_file(self, tmp_path: Path):
        assert load_config_file(tmp_path / "nope.json") is None

    def test_invalid_json(self, tmp_path: Path):
        """Test invalid JSON is ignored."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        assert load_config_file(path) is None

    def test_non_object(self, tmp_path: Path):
        """Test a top-level array is ignored."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        assert load_config_file(path) is None

    def test_jsonc(self, tmp_path: Path):
        """Test .jsonc files have comments stripped."""
        path = tmp_path / "config.jsonc"
        path.write_text('{\n  // budget\n  "fork": {"char_budget": 150000}\n}')

        assert load_config_file(path) == {"fork": {"char_budget": 150000}}


class TestMergeConfigs:
    """Test config merging."""

    def test_deep_merge(self):
        base = {"fork": {"tier1_count": 3, "tier2_count": 4}, "api": {"port": 1}}
        override = {"fork": {"tier1_count": 7}}

        assert merge_configs(base, override) == {
            "fork": {"tier1_count": 7, "tier2_count": 4},
            "api": {"port": 1},
        }


class TestEnvOverrides:
    """Test ASYNCAGENTS_* environment variables."""

    def test_empty(self):
        assert env_overrides({}) == {}

    def test_all_values(self):
        env = {
            "ASYNCAGENTS_API_ENABLED": "false",
            "ASYNCAGENTS_API_HOST": "0.0.0.0",
            "ASYNCAGENTS_API_PORT": "6000",
            "ASYNCAGENTS_STORAGE_DIR": "/tmp/tasks",
        }

        assert env_overrides(env) == {
            "api": {"enabled": False, "host": "0.0.0.0", "port": 6000},
            "storage_dir": "/tmp/tasks",
        }

    def test_enabled_values(self):
        """Test only 'false' disables the API."""
        assert env_overrides({"ASYNCAGENTS_API_ENABLED": "FALSE"})["api"]["enabled"] is False
        assert env_overrides({"ASYNCAGENTS_API_ENABLED": "1"})["api"]["enabled"] is True

    def test_invalid_port_ignored(self):
        assert env_overrides({"ASYNCAGENTS_API_PORT": "abc"}) == {}


class TestLoadConfig:
    """Test layered config loading."""

    def test_no_files(self, isolated_environment: Path):
        """Test defaults are used when no config files exist."""
        assert load_config(isolated_environment) == Config()

    def test_global_and_project(self, isolated_environment: Path):
        """Test project config overrides the global config."""
        global_dir = Path.home() / ".opencode"
        global_dir.mkdir()
        (global_dir / "async-agents.jsonc").write_text(
            '{"fork": {"tier1_count": 2, "tier2_count": 3}, "api": {"port": 7000}}'
        )
        (isolated_environment / "async-agents.json").write_text(
            '{"fork": {"tier1_count": 4}}'
        )

        config = load_config(isolated_environment)

        assert config.fork.tier1_count == 4
        assert config.fork.tier2_count == 3
        assert config.api.port == 7000

    def test_first_project_file_wins(self, isolated_environment: Path):
        """Test only the first project config found is used."""
        (isolated_environment / "async-agents.jsonc").write_text('{"api": {"port": 7001}}')
        (isolated_environment / "async-agents.json").write_text('{"api": {"port": 7002}}')

        assert load_config(isolated_environment).api.port == 7001

    def test_env_overrides_files(self, isolated_environment: Path, monkeypatch):
        """Test environment variables take precedence over files."""
        (isolated_environment / "async-agents.json").write_text('{"api": {"port": 7001}}')
        monkeypatch.setenv("ASYNCAGENTS_API_PORT", "7100")

        assert load_config(isolated_environment).api.port == 7100

    def test_invalid_values_raise(self, isolated_environment: Path):
        """Test invalid configuration surfaces at load time."""
        (isolated_environment / "async-agents.json").write_text(
            '{"fork": {"tier2_limit": 10, "tier3_limit": 20}}'
        )

        with pytest.raises(ValidationError):
            load_config(isolated_environment)

    def test_get_config_cached(self):
        """Test get_config returns the same instance until cleared."""
        assert get_config() is get_config()

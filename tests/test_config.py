"""Tests for configuration handling"""
import json
from pathlib import Path

import pytest

from aterm_workspace.config import Config, ConfigStore, get_config_path, get_user_config_dir
from aterm_workspace.exceptions import ConfigError


class TestConfig:
    """Test Config dataclass validation."""

    def test_defaults(self):
        config = Config()

        assert config.git_executable == "git"
        assert config.branch_prefix == "aterm"
        assert config.max_name_attempts == 20
        assert config.preserved_files == [".envrc", "docker-compose.override.yml"]
        assert config.preserved_prefixes == [".env"]
        assert config.default_history_limit == 50

    def test_branch_prefix_normalized(self):
        assert Config(branch_prefix=" tasks/ ").branch_prefix == "tasks"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"git_executable": "  "},
            {"branch_prefix": "/"},
            {"branch_prefix": "bad prefix"},
            {"max_name_attempts": 0},
            {"default_history_limit": -1},
            {"preserved_files": ".env"},
            {"preserved_files": ["config/.env"]},
            {"preserved_prefixes": [""]},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"branch_prefix": "wip", "theme": "dark"})

        assert config.branch_prefix == "wip"
        assert config.get("theme") is None
        assert config.get("theme", "light") == "light"

    def test_to_dict_round_trips(self):
        config = Config(remote_name="upstream", max_name_attempts=5)
        assert Config.from_dict(config.to_dict()) == config


class TestConfigPaths:
    """Test configuration file location."""

    def test_xdg_config_home(self, monkeypatch, temp_dir):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))

        assert get_user_config_dir() == temp_dir
        assert get_config_path() == temp_dir / "aterm" / "config.json"

    def test_linux_fallback(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr("aterm_workspace.config.sys.platform", "linux")

        assert get_user_config_dir() == Path.home() / ".config"

    def test_macos_fallback(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr("aterm_workspace.config.sys.platform", "darwin")

        assert get_user_config_dir() == Path.home() / "Library" / "Application Support"


class TestConfigStore:
    """Test loading and saving the JSON blob."""

    def test_load_missing_returns_none(self, temp_dir):
        assert ConfigStore(temp_dir / "aterm" / "config.json").load() is None

    def test_save_creates_directory_and_round_trips(self, temp_dir):
        path = temp_dir / "aterm" / "config.json"
        store = ConfigStore(path)
        blob = {"projects": ["/src/a"], "ui": {"theme": "dark"}, "count": 3}

        store.save(blob)

        assert path.exists()
        assert json.loads(path.read_text()) == blob
        assert ConfigStore(path).load() == blob

    def test_save_overwrites(self, temp_dir):
        store = ConfigStore(temp_dir / "config.json")
        store.save({"a": 1})
        store.save([1, 2])
        assert store.load() == [1, 2]

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError):
            ConfigStore(path).load()

    def test_unserialisable_value(self, temp_dir):
        with pytest.raises(ConfigError):
            ConfigStore(temp_dir / "config.json").save({"when": object()})

    def test_load_settings_from_workspace_section(self, temp_dir):
        store = ConfigStore(temp_dir / "config.json")
        store.save({"workspace": {"branch_prefix": "wip", "unknown": 1}, "ui": {}})

        assert store.load_settings().branch_prefix == "wip"

    def test_load_settings_defaults(self, temp_dir):
        assert ConfigStore(temp_dir / "missing.json").load_settings() == Config()

        store = ConfigStore(temp_dir / "config.json")
        store.save(["not", "a", "dict"])
        assert store.load_settings() == Config()

    def test_load_settings_invalid_values(self, temp_dir):
        store = ConfigStore(temp_dir / "config.json")
        store.save({"workspace": {"max_name_attempts": 0}})

        with pytest.raises(ConfigError):
            store.load_settings()

"""Configuration handling for aterm-workspace"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from aterm_workspace.exceptions import ConfigError
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)

APP_DIR_NAME = "aterm"
CONFIG_FILE_NAME = "config.json"


@dataclass
class Config:
    """Engine settings for aterm-workspace with validation."""

    # Process invocation
    git_executable: str = "git"
    remote_name: str = "origin"

    # Worktree naming and layout
    branch_prefix: str = "aterm"
    worktrees_dir_name: str = "worktrees"
    max_name_attempts: int = 20

    # Files copied from the project root into every new worktree
    preserved_files: List[str] = field(
        default_factory=lambda: [".envrc", "docker-compose.override.yml"]
    )
    preserved_prefixes: List[str] = field(default_factory=lambda: [".env"])

    # History
    default_history_limit: int = 50

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_git_executable()
        self._validate_branch_prefix()
        self._validate_max_name_attempts()
        self._validate_history_limit()
        self._validate_preserved()

    def _validate_git_executable(self):
        """Validate git_executable is not empty."""
        if not self.git_executable or not self.git_executable.strip():
            raise ValueError("git_executable cannot be empty")
        self.git_executable = self.git_executable.strip()

    def _validate_branch_prefix(self):
        """Validate branch_prefix is a usable ref component."""
        prefix = (self.branch_prefix or "").strip().strip("/")
        if not prefix:
            raise ValueError("branch_prefix cannot be empty")
        if " " in prefix or ".." in prefix:
            raise ValueError(f"branch_prefix is not a valid ref component: '{self.branch_prefix}'")
        self.branch_prefix = prefix

    def _validate_max_name_attempts(self):
        """Validate max_name_attempts is positive."""
        if self.max_name_attempts <= 0:
            raise ValueError(f"max_name_attempts must be positive, got {self.max_name_attempts}")

    def _validate_history_limit(self):
        """Validate default_history_limit is positive."""
        if self.default_history_limit <= 0:
            raise ValueError(
                f"default_history_limit must be positive, got {self.default_history_limit}"
            )

    def _validate_preserved(self):
        """Validate preserved file settings are lists of plain names."""
        for attr in ("preserved_files", "preserved_prefixes"):
            values = getattr(self, attr)
            if not isinstance(values, list):
                raise ValueError(f"{attr} must be a list")
            for value in values:
                if not value or "/" in value or os.sep in value:
                    raise ValueError(f"{attr} entries must be plain file names, got '{value}'")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "git_executable": self.git_executable,
            "remote_name": self.remote_name,
            "branch_prefix": self.branch_prefix,
            "worktrees_dir_name": self.worktrees_dir_name,
            "max_name_attempts": self.max_name_attempts,
            "preserved_files": self.preserved_files,
            "preserved_prefixes": self.preserved_prefixes,
            "default_history_limit": self.default_history_limit,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = set(cls.__dataclass_fields__)
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def get_user_config_dir() -> Path:
    """Per-user configuration directory for the current platform."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Fixed location of the persisted configuration blob."""
    return get_user_config_dir() / APP_DIR_NAME / CONFIG_FILE_NAME


class ConfigStore:
    """Load and save the application's JSON configuration blob.

    The blob is opaque here: whatever JSON the host application saves is
    returned as-is by the next ``load``.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else get_config_path()

    def load(self) -> Optional[Any]:
        """Return the stored JSON value, or None when nothing was saved yet."""
        if not self.path.exists():
            logger.debug(f"No config file at {self.path}")
            return None

        try:
            content = self.path.read_text(encoding="utf-8")
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid config file {self.path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Could not read config file {self.path}: {e}") from e

    def save(self, value: Any) -> None:
        """Persist a JSON-serialisable value, creating the directory if needed."""
        try:
            content = json.dumps(value, indent=2)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Config is not JSON serialisable: {e}") from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not write config file {self.path}: {e}") from e

        logger.debug(f"Saved config to {self.path}")

    def load_settings(self) -> Config:
        """Build engine settings from the optional "workspace" section of the blob."""
        data = self.load()
        if isinstance(data, dict) and isinstance(data.get("workspace"), dict):
            try:
                return Config.from_dict(data["workspace"])
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid workspace settings: {e}") from e
        return Config()

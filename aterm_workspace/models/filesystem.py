"""Models returned by the file browser and terminal profile services."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DirEntry:
    """A single entry of a directory listing."""

    name: str
    path: str
    is_dir: bool
    is_git_repo: bool

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "isDir": self.is_dir,
            "isGitRepo": self.is_git_repo,
        }


@dataclass(frozen=True)
class TerminalProfile:
    """A terminal emulator profile."""

    name: str
    guid: str
    command: Optional[str] = None
    working_directory: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "guid": self.guid,
            "command": self.command,
            "workingDirectory": self.working_directory,
        }

"""Directory listing for the project browser."""

import os
from pathlib import Path
from typing import List, Optional

from aterm_workspace.exceptions import FileOperationError
from aterm_workspace.models.filesystem import DirEntry
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)


def get_home_dir() -> str:
    """The user's home directory, or ``/`` if it cannot be determined."""
    try:
        return str(Path.home())
    except RuntimeError:
        return "/"


def list_directory(path: Optional[str] = None) -> List[DirEntry]:
    """List a directory for browsing.

    Dotfiles are hidden. Directories come before files, and each group is
    sorted case-insensitively by name. A directory counts as a git
    repository when it contains a ``.git`` entry.

    Args:
        path: Directory to list (defaults to the home directory)

    Raises:
        FileOperationError: The directory cannot be read
    """
    dir_path = Path(path) if path else Path(get_home_dir())

    entries = []
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                if entry.name.startswith("."):
                    continue

                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                entry_path = dir_path / entry.name
                is_git_repo = is_dir and (entry_path / ".git").exists()

                entries.append(
                    DirEntry(
                        name=entry.name,
                        path=str(entry_path),
                        is_dir=is_dir,
                        is_git_repo=is_git_repo,
                    )
                )
    except OSError as e:
        raise FileOperationError(f"Could not list {dir_path}: {e}") from e

    entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))
    logger.debug(f"Listed {len(entries)} entries in {dir_path}")
    return entries

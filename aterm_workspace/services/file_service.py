"""File reading, writing and opening in an external editor."""

import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from aterm_workspace.exceptions import FileOperationError
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)

# Editor names accepted by open_in_editor and the command each one runs
EDITOR_COMMANDS = {
    "vscode": ["code"],
    "code": ["code"],
    "cursor": ["cursor"],
}


def read_file(path: str) -> str:
    """Read a UTF-8 text file."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError(f"Could not read {path}: {e}") from e


def write_file(path: str, content: str) -> None:
    """Write ``content`` to a file, replacing what was there."""
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileOperationError(f"Could not write {path}: {e}") from e
    logger.debug(f"Wrote {len(content)} characters to {path}")


def editor_command(path: str, editor: Optional[str] = None) -> List[str]:
    """Command line that opens ``path`` in ``editor``.

    Unknown or missing editors fall back to the system's default text
    editor (``open -t`` on macOS, ``xdg-open`` elsewhere).
    """
    if editor in EDITOR_COMMANDS:
        return [*EDITOR_COMMANDS[editor], path]
    if sys.platform == "darwin":
        return ["open", "-t", path]
    return ["xdg-open", path]


def open_in_editor(path: str, editor: Optional[str] = None) -> None:
    """Launch an editor on ``path`` without waiting for it to exit."""
    command = editor_command(path, editor)
    try:
        subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise FileOperationError(f"Could not launch {command[0]}: {e}") from e
    logger.debug(f"Opened {path} with {command[0]}")

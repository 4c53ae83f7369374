"""Read-only access to iTerm2 profiles."""

import plistlib
from pathlib import Path
from typing import List, Optional

from aterm_workspace.exceptions import TerminalProfilesError
from aterm_workspace.models.filesystem import TerminalProfile
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)

ITERM_PLIST = Path("Library") / "Preferences" / "com.googlecode.iterm2.plist"


def get_iterm_plist_path() -> Path:
    return Path.home() / ITERM_PLIST


def _non_empty_string(value) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def parse_profiles(data: dict) -> List[TerminalProfile]:
    """Build profiles from the ``New Bookmarks`` array of iTerm2 preferences.

    The startup command prefers "Initial Text" (text sent at start) over
    "Command". Bookmarks without a GUID are skipped.
    """
    bookmarks = data.get("New Bookmarks")
    if not isinstance(bookmarks, list):
        raise TerminalProfilesError("No profiles found in iTerm2")

    profiles = []
    for bookmark in bookmarks:
        if not isinstance(bookmark, dict):
            continue

        guid = _non_empty_string(bookmark.get("Guid"))
        if not guid:
            continue

        name = bookmark.get("Name")
        profiles.append(
            TerminalProfile(
                name=name if isinstance(name, str) else "Unnamed",
                guid=guid,
                command=_non_empty_string(bookmark.get("Initial Text"))
                or _non_empty_string(bookmark.get("Command")),
                working_directory=_non_empty_string(bookmark.get("Working Directory")),
            )
        )
    return profiles


def get_terminal_profiles(plist_path: Optional[Path] = None) -> List[TerminalProfile]:
    """List the profiles configured in iTerm2.

    Raises:
        TerminalProfilesError: The preferences file is missing or unreadable
    """
    path = Path(plist_path) if plist_path is not None else get_iterm_plist_path()
    if not path.exists():
        raise TerminalProfilesError("iTerm2 preferences not found")

    try:
        with open(path, "rb") as f:
            data = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException, ValueError) as e:
        raise TerminalProfilesError(f"Failed to read iTerm2 plist: {e}") from e

    if not isinstance(data, dict):
        raise TerminalProfilesError("Invalid plist format")

    profiles = parse_profiles(data)
    logger.debug(f"Found {len(profiles)} iTerm2 profiles")
    return profiles

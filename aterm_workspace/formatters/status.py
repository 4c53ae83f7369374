"""Status formatting utilities."""

from typing import Optional

from rich.markup import escape

from aterm_workspace.constants import CLI_COLORS, FILE_STATUS_SYMBOLS
from aterm_workspace.models.status import ChangeRecord, RepositoryStatus


def format_change(record: ChangeRecord) -> str:
    """
    Format a change record as a status letter followed by its path.

    Renames show both names: "R old.txt -> new.txt".
    """
    symbol = FILE_STATUS_SYMBOLS.get(record.status, "·")
    if record.old_path:
        return f"{symbol} {record.old_path} -> {record.path}"
    return f"{symbol} {record.path}"


def format_tracking(status: RepositoryStatus) -> str:
    """
    Format the ahead/behind counts, e.g. "↑2 ↓1". Empty when in sync.
    """
    parts = []
    if status.ahead:
        parts.append(f"↑{status.ahead}")
    if status.behind:
        parts.append(f"↓{status.behind}")
    return " ".join(parts)


def format_branch_line(status: RepositoryStatus) -> str:
    """
    Format the header line of a status report with Rich markup.
    """
    branch = escape(status.branch or "(detached)")
    line = f"On branch [{CLI_COLORS['branch']}]{branch}[/{CLI_COLORS['branch']}]"
    tracking = format_tracking(status)
    if tracking:
        line += f"  {tracking}"
    return line


def section_style(section: str) -> Optional[str]:
    """Rich color for a status section name."""
    return CLI_COLORS.get(section)

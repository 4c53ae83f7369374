"""Shared constants for aterm-workspace."""

from aterm_workspace.models.commit import CommitFileStatus
from aterm_workspace.models.status import FileStatus


# Short status letters shown next to paths in CLI listings
FILE_STATUS_SYMBOLS = {
    FileStatus.MODIFIED: "M",
    FileStatus.ADDED: "A",
    FileStatus.DELETED: "D",
    FileStatus.RENAMED: "R",
    FileStatus.COPIED: "C",
    FileStatus.UNMERGED: "U",
    FileStatus.UNTRACKED: "?",
    FileStatus.UNKNOWN: "·",
}

COMMIT_FILE_STATUS_SYMBOLS = {
    CommitFileStatus.ADDED: "A",
    CommitFileStatus.MODIFIED: "M",
    CommitFileStatus.DELETED: "D",
    CommitFileStatus.RENAMED: "R",
}


# CLI colors (Rich color names)
CLI_COLORS = {
    "staged": "green",
    "unstaged": "red",
    "untracked": "bright_black",
    "branch": "cyan",
    "hash": "yellow",
    "additions": "green",
    "deletions": "red",
}


# Rich styles for unified diff lines
DIFF_LINE_STYLES = {
    "+": "green",
    "-": "red",
    "@": "cyan",
}

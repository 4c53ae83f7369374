"""Data models for aterm-workspace."""

from .status import FileStatus, ChangeRecord, RepositoryStatus
from .commit import CommitFileStatus, CommitSummary, CommitFileChange
from .worktree import WorktreeInfo, DETACHED
from .filesystem import DirEntry, TerminalProfile

__all__ = [
    "FileStatus",
    "ChangeRecord",
    "RepositoryStatus",
    "CommitFileStatus",
    "CommitSummary",
    "CommitFileChange",
    "WorktreeInfo",
    "DETACHED",
    "DirEntry",
    "TerminalProfile",
]

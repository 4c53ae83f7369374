"""Working copy status models"""
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional


class FileStatus(Enum):
    """Change state of a single path."""
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UNMERGED = "unmerged"
    UNTRACKED = "untracked"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str) -> "FileStatus":
        """Map a one-letter porcelain status code."""
        return _STATUS_CODES.get(code, cls.UNKNOWN)


_STATUS_CODES = {
    "M": FileStatus.MODIFIED,
    "A": FileStatus.ADDED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
    "C": FileStatus.COPIED,
    "U": FileStatus.UNMERGED,
    "?": FileStatus.UNTRACKED,
}


@dataclass(frozen=True)
class ChangeRecord:
    """One file's change relative to HEAD or the index."""
    path: str
    status: FileStatus
    staged: bool
    old_path: Optional[str] = None  # Only set for renames

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "status": self.status.value,
            "staged": self.staged,
            "oldPath": self.old_path,
        }


@dataclass
class RepositoryStatus:
    """Snapshot of a working copy, partitioned into staged/unstaged/untracked."""
    branch: str
    ahead: int = 0
    behind: int = 0
    staged: List[ChangeRecord] = field(default_factory=list)
    unstaged: List[ChangeRecord] = field(default_factory=list)
    untracked: List[ChangeRecord] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked)

    def to_dict(self) -> dict:
        return {
            "branch": self.branch,
            "ahead": self.ahead,
            "behind": self.behind,
            "staged": [r.to_dict() for r in self.staged],
            "unstaged": [r.to_dict() for r in self.unstaged],
            "untracked": [r.to_dict() for r in self.untracked],
        }

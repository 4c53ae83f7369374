"""Commit history models"""
from enum import Enum
from dataclasses import dataclass


class CommitFileStatus(Enum):
    """How a commit touched a file."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"

    @classmethod
    def from_code(cls, code: str) -> "CommitFileStatus":
        """Map a name-status code; anything unrecognised counts as modified."""
        return {
            "A": cls.ADDED,
            "M": cls.MODIFIED,
            "D": cls.DELETED,
            "R": cls.RENAMED,
        }.get(code, cls.MODIFIED)


@dataclass
class CommitSummary:
    """A commit with its diffstat totals."""
    hash: str
    short_hash: str
    subject: str
    author: str
    timestamp: int  # Unix epoch seconds
    relative_time: str
    files_changed: int = 0
    additions: int = 0
    deletions: int = 0

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "shortHash": self.short_hash,
            "subject": self.subject,
            "author": self.author,
            "timestamp": self.timestamp,
            "relativeTime": self.relative_time,
            "filesChanged": self.files_changed,
            "additions": self.additions,
            "deletions": self.deletions,
        }


@dataclass(frozen=True)
class CommitFileChange:
    """One file touched by a single commit."""
    path: str
    status: CommitFileStatus
    additions: int = 0
    deletions: int = 0

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "status": self.status.value,
            "additions": self.additions,
            "deletions": self.deletions,
        }

"""Worktree data models."""

from dataclasses import dataclass

# Branch label used for worktrees without an attached branch
DETACHED = "detached"


@dataclass(frozen=True)
class WorktreeInfo:
    """Information about a git worktree."""

    path: str  # Absolute filesystem path
    branch: str  # Short branch name, or DETACHED

    @property
    def is_detached(self) -> bool:
        return self.branch == DETACHED

    def to_dict(self) -> dict:
        return {"path": self.path, "branch": self.branch}

    def __str__(self) -> str:
        """String representation of worktree."""
        return f"{self.branch} @ {self.path}"

"""Git-related services for aterm-workspace."""

from .runner import GitRunner, ProcessResult, run_process
from .status import StatusService
from .history import HistoryService
from .operations import GitOperations
from .branch_queries import BranchQueries
from .worktrees import WorktreeService

__all__ = [
    "GitRunner",
    "ProcessResult",
    "run_process",
    "StatusService",
    "HistoryService",
    "GitOperations",
    "BranchQueries",
    "WorktreeService",
]

"""Core functionality for aterm-workspace"""

from typing import List, Optional, Sequence, Union

from aterm_workspace.config import Config
from aterm_workspace.models.commit import CommitFileChange, CommitSummary
from aterm_workspace.models.status import RepositoryStatus
from aterm_workspace.models.worktree import WorktreeInfo
from aterm_workspace.services.git import (
    BranchQueries,
    GitOperations,
    GitRunner,
    HistoryService,
    StatusService,
    WorktreeService,
)
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)


class Workspace:
    """Entry point for every workspace and version-control operation.

    A Workspace carries settings only. Each call names the repository or
    project path it works on, spawns its own git processes and keeps
    nothing afterwards, so one instance can serve concurrent callers.
    """

    def __init__(self, config: Union[Config, dict, None] = None, runner: Optional[GitRunner] = None):
        """Initialize the workspace backend.

        Args:
            config: Config object or dict (defaults to Config())
            runner: Process invoker (defaults to one using the configured git executable)
        """
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        self.runner = runner or GitRunner(self.config.git_executable)
        self.status_service = StatusService(self.runner)
        self.history_service = HistoryService(self.runner)
        self.operations = GitOperations(self.runner, self.config)
        self.branch_queries = BranchQueries(self.runner)
        self.worktree_service = WorktreeService(self.runner, self.config, self.branch_queries)

    # Working copy

    def get_status(self, path: str) -> RepositoryStatus:
        return self.status_service.get_status(path)

    def get_file_diff(self, path: str, file: str, staged: bool = False) -> str:
        return self.status_service.get_file_diff(path, file, staged)

    def stage_files(self, path: str, files: Sequence[str]) -> None:
        self.operations.stage_files(path, files)

    def stage_all(self, path: str) -> None:
        self.operations.stage_all(path)

    def unstage_files(self, path: str, files: Sequence[str]) -> None:
        self.operations.unstage_files(path, files)

    def unstage_all(self, path: str) -> None:
        self.operations.unstage_all(path)

    def discard_changes(self, path: str, file: str, is_untracked: bool) -> None:
        self.operations.discard_changes(path, file, is_untracked)

    def commit(self, path: str, message: str) -> str:
        return self.operations.commit(path, message)

    def push(self, path: str) -> str:
        return self.operations.push(path)

    # History

    def get_commit_history(self, path: str, limit: Optional[int] = None) -> List[CommitSummary]:
        if limit is None:
            limit = self.config.default_history_limit
        return self.history_service.get_commit_history(path, limit)

    def get_commit_files(self, path: str, commit_hash: str) -> List[CommitFileChange]:
        return self.history_service.get_commit_files(path, commit_hash)

    def get_commit_diff(self, path: str, commit_hash: str, file: Optional[str] = None) -> str:
        return self.history_service.get_commit_diff(path, commit_hash, file)

    # Remotes

    def clone(self, url: str, destination: str) -> str:
        return self.operations.clone(url, destination)

    def get_remote_url(self, path: str) -> Optional[str]:
        return self.operations.get_remote_url(path)

    # Worktrees and branches

    def create_worktree(
        self, project_path: str, task_name: str, base_ref: Optional[str] = None
    ) -> WorktreeInfo:
        return self.worktree_service.create_worktree(project_path, task_name, base_ref)

    def remove_worktree(self, worktree_path: str) -> None:
        self.worktree_service.remove_worktree(worktree_path)

    def prune_worktrees(self, project_path: str) -> None:
        self.worktree_service.prune_worktrees(project_path)

    def list_worktrees(self, project_path: str) -> List[WorktreeInfo]:
        return self.branch_queries.list_worktrees(project_path)

    def list_branches(self, project_path: str) -> List[str]:
        return self.branch_queries.list_branches(project_path)

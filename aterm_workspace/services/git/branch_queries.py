"""Branch and worktree inventory queries."""

from typing import List, Optional

from aterm_workspace.exceptions import GitCommandFailed, NotAGitRepositoryError
from aterm_workspace.models.worktree import DETACHED, WorktreeInfo
from aterm_workspace.services.git.runner import GitRunner
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)

HEADS_PREFIX = "refs/heads/"


def parse_worktree_list(text: str) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or a bare "detached" line)

    Entries are delimited by the next ``worktree`` line; blank lines are not
    relied upon. An entry without a branch line is reported as detached.
    """
    worktrees: List[WorktreeInfo] = []
    current_path: Optional[str] = None
    current_branch: Optional[str] = None

    for line in text.splitlines():
        if line.startswith("worktree "):
            if current_path is not None:
                worktrees.append(WorktreeInfo(path=current_path, branch=current_branch or DETACHED))
            current_path = line[len("worktree "):].strip()
            current_branch = None
        elif line.startswith("branch "):
            branch = line[len("branch "):].strip()
            if branch.startswith(HEADS_PREFIX):
                branch = branch[len(HEADS_PREFIX):]
            current_branch = branch
        elif line.startswith("detached"):
            current_branch = DETACHED

    if current_path is not None:
        worktrees.append(WorktreeInfo(path=current_path, branch=current_branch or DETACHED))

    return worktrees


def parse_branch_list(text: str) -> List[str]:
    """Parse ``for-each-ref --format=%(refname:short)`` output into sorted names."""
    branches = [line.strip() for line in text.splitlines()]
    return sorted(branch for branch in branches if branch)


class BranchQueries:
    """Service for querying branches and worktrees of a project."""

    def __init__(self, runner: GitRunner):
        """Initialize the branch queries service.

        Args:
            runner: Process invoker used for every git call
        """
        self.runner = runner

    def ensure_git_repo(self, path: str) -> None:
        """Raise NotAGitRepositoryError unless ``path`` is inside a work tree."""
        result = self.runner.run_in(path, "rev-parse", "--is-inside-work-tree")
        if not result.ok or result.text.strip() != "true":
            logger.debug(f"{path} is not a git work tree: {result.error_message()}")
            raise NotAGitRepositoryError(path)

    def get_current_branch(self, path: str) -> str:
        """Current branch name, or ``HEAD`` when the project is detached.

        The result is always usable as a base ref for new branches.
        """
        result = self.runner.run_in(path, "branch", "--show-current")
        if not result.ok:
            raise GitCommandFailed("branch", "Failed to determine current branch", result.status)
        return result.text.strip() or "HEAD"

    def branch_exists(self, path: str, branch: str) -> bool:
        """Check whether a local branch of exactly this name exists."""
        result = self.runner.run_in(
            path, "show-ref", "--verify", "--quiet", f"{HEADS_PREFIX}{branch}"
        )
        return result.ok

    def list_branches(self, project_path: str) -> List[str]:
        """Local branch names, sorted lexicographically."""
        self.ensure_git_repo(project_path)
        result = self.runner.run_in(
            project_path, "for-each-ref", "refs/heads", "--format=%(refname:short)"
        )
        if not result.ok:
            raise GitCommandFailed("for-each-ref", "Failed to list branches", result.status)
        return parse_branch_list(result.text)

    def list_worktrees(self, project_path: str) -> List[WorktreeInfo]:
        """All worktrees of the project, the main working tree first."""
        self.ensure_git_repo(project_path)
        result = self.runner.run_in(project_path, "worktree", "list", "--porcelain")
        if not result.ok:
            raise GitCommandFailed("worktree list", "Failed to list worktrees", result.status)

        worktrees = parse_worktree_list(result.text)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

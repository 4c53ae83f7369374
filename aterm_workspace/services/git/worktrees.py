"""Worktree lifecycle: naming, creation with preserved files, and removal."""

import os
import re
import shutil
import time
from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING

from aterm_workspace.exceptions import (
    GitCommandFailed,
    InvalidProjectPathError,
    PreservedFileCopyError,
    WorkspaceError,
    WorktreeNameExhaustedError,
)
from aterm_workspace.models.worktree import WorktreeInfo
from aterm_workspace.services.git.branch_queries import BranchQueries
from aterm_workspace.services.git.runner import GitRunner
from aterm_workspace.logging_config import get_logger

if TYPE_CHECKING:
    from aterm_workspace.config import Config

logger = get_logger(__name__)

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")

DEFAULT_SLUG = "task"
SUFFIX_MASK = 0xFFF


def slugify_task_name(name: str) -> str:
    """Turn a free-form task name into a branch- and path-safe slug.

    ASCII letters are lowercased and kept with digits; every run of other
    characters becomes a single ``-``. Leading and trailing dashes are
    dropped, and an empty result falls back to ``task``.

    Examples:
        "Fix Bug #42" -> "fix-bug-42"
        "!!!" -> "task"
    """
    lowered = "".join(ch.lower() if ch.isascii() else ch for ch in name)
    slug = _NON_SLUG_RE.sub("-", lowered).strip("-")
    return slug or DEFAULT_SLUG


def generate_suffix(seed: str) -> str:
    """Short hex tag mixing ``seed`` with the current nanosecond clock.

    Only meant to make collisions unlikely; it is neither stable across
    runs nor cryptographically meaningful.
    """
    return f"{hash((seed, time.time_ns())) & SUFFIX_MASK:03x}"


class WorktreeService:
    """Service for creating, listing and removing task worktrees.

    Worktrees of ``<parent>/<project>`` live under
    ``<parent>/worktrees/<project>/<slug>-<suffix>`` on branches named
    ``aterm/<slug>-<suffix>``.
    """

    def __init__(
        self,
        runner: GitRunner,
        config: Union["Config", dict],
        branch_queries: Optional[BranchQueries] = None,
    ):
        """Initialize the worktree service.

        Args:
            runner: Process invoker used for every git call
            config: Configuration dictionary or Config object
            branch_queries: Branch/worktree inventory (created from ``runner`` if omitted)
        """
        self.runner = runner
        self.config = config
        self.branch_queries = branch_queries or BranchQueries(runner)
        self.branch_prefix = config.get("branch_prefix", "aterm")
        self.worktrees_dir_name = config.get("worktrees_dir_name", "worktrees")
        self.max_attempts = config.get("max_name_attempts", 20)
        self.preserved_files = list(
            config.get("preserved_files", [".envrc", "docker-compose.override.yml"])
        )
        self.preserved_prefixes = list(config.get("preserved_prefixes", [".env"]))

    def get_worktrees_root(self, project_path: str) -> Path:
        """Directory shared by all worktrees of a project.

        Raises:
            InvalidProjectPathError: The path has no final component or no parent
        """
        project_dir = Path(os.path.abspath(project_path))
        if not project_dir.name:
            raise InvalidProjectPathError("Invalid project path")
        if project_dir.parent == project_dir:
            raise InvalidProjectPathError("Project path has no parent")
        return project_dir.parent / self.worktrees_dir_name / project_dir.name

    def resolve_base_ref(self, project_path: str, base_ref: Optional[str] = None) -> str:
        """Use ``base_ref`` if given and non-blank, else the project's current branch."""
        if base_ref is not None and base_ref.strip():
            return base_ref.strip()
        return self.branch_queries.get_current_branch(project_path)

    def is_preserved_file(self, name: str) -> bool:
        """Whether a project-root file is copied into new worktrees."""
        return name in self.preserved_files or any(
            name.startswith(prefix) for prefix in self.preserved_prefixes
        )

    def copy_preserved_files(self, project_dir: Path, worktree_dir: Path) -> List[str]:
        """Copy local-only files such as ``.env`` from the project root.

        Only regular files directly under the project root are considered.
        Files that already exist in the worktree (because git checked them
        out) are left untouched.

        Returns:
            Names of the files copied

        Raises:
            PreservedFileCopyError: A file could not be copied
        """
        copied = []
        try:
            entries = sorted(project_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise WorkspaceError(f"Could not read {project_dir}: {e}") from e

        for entry in entries:
            if not entry.is_file() or not self.is_preserved_file(entry.name):
                continue

            dest = worktree_dir / entry.name
            if dest.exists():
                logger.debug(f"Not copying {entry.name}: already present in worktree")
                continue

            try:
                shutil.copy2(entry, dest)
            except OSError as e:
                raise PreservedFileCopyError(entry.name, str(e)) from e
            copied.append(entry.name)

        if copied:
            logger.debug(f"Copied preserved files into {worktree_dir}: {', '.join(copied)}")
        return copied

    def create_worktree(
        self, project_path: str, task_name: str, base_ref: Optional[str] = None
    ) -> WorktreeInfo:
        """Create a worktree on a fresh branch for a task.

        Names are probed up to ``max_name_attempts`` times; a candidate is
        taken only if neither its directory nor its branch exists yet. The
        probe is not a reservation, so two concurrent callers could in
        principle pick the same name; git then rejects the second add.

        Args:
            project_path: Main working tree of the project
            task_name: Free-form task description used for the name
            base_ref: Ref to branch from (defaults to the current branch)

        Returns:
            WorktreeInfo with the new directory and branch

        Raises:
            NotAGitRepositoryError: ``project_path`` is not a git work tree
            WorktreeNameExhaustedError: No free name was found
            GitCommandFailed: ``git worktree add`` failed
            PreservedFileCopyError: Copying a preserved file failed (the
                worktree is kept)
        """
        self.branch_queries.ensure_git_repo(project_path)

        project_dir = Path(os.path.abspath(project_path))
        worktrees_root = self.get_worktrees_root(project_path)
        try:
            worktrees_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"Could not create {worktrees_root}: {e}") from e

        slug = slugify_task_name(task_name)
        base = self.resolve_base_ref(project_path, base_ref)

        for attempt in range(self.max_attempts):
            suffix = generate_suffix(f"{task_name}-{attempt}")
            name = f"{slug}-{suffix}"
            branch = f"{self.branch_prefix}/{name}"
            worktree_dir = worktrees_root / name

            if worktree_dir.exists():
                logger.debug(f"Worktree directory {worktree_dir} exists, trying another name")
                continue

            if self.branch_queries.branch_exists(project_path, branch):
                logger.debug(f"Branch {branch} exists, trying another name")
                continue

            result = self.runner.run_in(
                project_path, "worktree", "add", "-b", branch, str(worktree_dir), base
            )
            if not result.ok:
                raise GitCommandFailed(
                    "worktree add",
                    result.stderr.strip() or "git worktree add failed",
                    result.status,
                )
            logger.info(f"Created worktree {worktree_dir} on {branch} from {base}")

            self.copy_preserved_files(project_dir, worktree_dir)
            return WorktreeInfo(path=str(worktree_dir), branch=branch)

        raise WorktreeNameExhaustedError(self.max_attempts)

    def get_common_dir(self, worktree_path: str) -> Path:
        """Absolute path of the git directory shared by all worktrees."""
        result = self.runner.run_in(worktree_path, "rev-parse", "--git-common-dir")
        if not result.ok:
            raise GitCommandFailed(
                "rev-parse", "Failed to locate git common dir", result.status
            )

        common_dir = Path(result.text.strip())
        if not common_dir.is_absolute():
            common_dir = Path(worktree_path) / common_dir
        return common_dir

    def remove_worktree(self, worktree_path: str) -> None:
        """Force-remove a worktree given only its own path.

        The shared git directory is resolved from inside the worktree, so
        the project path is not needed. No manual cleanup is
        attempted if git refuses.

        Raises:
            GitCommandFailed: The common dir could not be resolved or the
                removal failed
        """
        worktree_path = os.path.abspath(worktree_path)
        common_dir = self.get_common_dir(worktree_path)

        result = self.runner.run(
            "--git-dir", str(common_dir), "worktree", "remove", "--force", worktree_path
        )
        if not result.ok:
            raise GitCommandFailed(
                "worktree remove",
                result.stderr.strip() or "git worktree remove failed",
                result.status,
            )
        logger.info(f"Removed worktree at {worktree_path}")

    def prune_worktrees(self, project_path: str) -> None:
        """Drop metadata of worktrees whose directories no longer exist."""
        self.branch_queries.ensure_git_repo(project_path)
        self.runner.check(self.runner.run_in(project_path, "worktree", "prune"), "worktree prune")
        logger.info("Pruned orphaned worktree metadata")

"""Mutating git operations: staging, commits, push, clone and remotes."""

import shutil
from pathlib import Path
from typing import Optional, Sequence, Union, TYPE_CHECKING

from aterm_workspace.exceptions import FileOperationError, GitCommandFailed
from aterm_workspace.services.git.runner import GitRunner
from aterm_workspace.logging_config import get_logger

if TYPE_CHECKING:
    from aterm_workspace.config import Config

logger = get_logger(__name__)


class GitOperations:
    """Service for git operations that change a repository or its index."""

    def __init__(self, runner: GitRunner, config: Union["Config", dict]):
        """Initialize the service.

        Args:
            runner: Process invoker used for every git call
            config: Configuration dictionary or Config object
        """
        self.runner = runner
        self.config = config
        self.remote_name = config.get("remote_name", "origin")

    def stage_files(self, path: str, files: Sequence[str]) -> None:
        """Add the given paths to the index."""
        if not files:
            logger.debug("No files to stage")
            return
        self.runner.check(self.runner.run_in(path, "add", "--", *files), "add")
        logger.debug(f"Staged {len(files)} file(s) in {path}")

    def stage_all(self, path: str) -> None:
        """Stage every change, including deletions and untracked files."""
        self.runner.check(self.runner.run_in(path, "add", "-A"), "add")

    def unstage_files(self, path: str, files: Sequence[str]) -> None:
        """Reset the given paths in the index to HEAD."""
        # An empty pathspec would reset the whole index
        if not files:
            logger.debug("No files to unstage")
            return
        self.runner.check(self.runner.run_in(path, "reset", "HEAD", "--", *files), "reset")
        logger.debug(f"Unstaged {len(files)} file(s) in {path}")

    def unstage_all(self, path: str) -> None:
        """Reset the whole index to HEAD, keeping working tree changes."""
        self.runner.check(self.runner.run_in(path, "reset", "HEAD"), "reset")

    def discard_changes(self, path: str, file: str, is_untracked: bool) -> None:
        """Throw away local changes to one path.

        Untracked paths are deleted from disk; tracked files are restored
        from the index.
        """
        if is_untracked:
            target = Path(path) / file
            try:
                if target.is_dir() and not target.is_symlink():
                    shutil.rmtree(target)
                else:
                    target.unlink()
            except OSError as e:
                raise FileOperationError(f"Could not delete {file}: {e}") from e
            logger.info(f"Deleted untracked {file}")
            return

        self.runner.check(self.runner.run_in(path, "checkout", "--", file), "checkout")
        logger.info(f"Discarded changes to {file}")

    def commit(self, path: str, message: str) -> str:
        """Commit the index with ``message`` and return git's output."""
        output = self.runner.output_in(path, "commit", "commit", "-m", message)
        logger.info(f"Committed in {path}: {message.splitlines()[0] if message else ''}")
        return output

    def push(self, path: str) -> str:
        """Push the current branch.

        A plain ``git push`` is tried first; if it fails (typically because
        no upstream is configured) the push is retried once as
        ``git push -u <remote> <current-branch>``.
        """
        result = self.runner.run_in(path, "push")
        if result.ok:
            logger.info(f"Pushed {path}")
            return result.text

        logger.debug(f"Plain push failed, retrying with upstream: {result.error_message()}")
        branch = self.runner.run_in(path, "branch", "--show-current").text.strip()
        if not branch:
            raise GitCommandFailed("push", result.stderr.strip() or None, result.status)

        output = self.runner.output_in(path, "push", "push", "-u", self.remote_name, branch)
        logger.info(f"Pushed {branch} to {self.remote_name} and set upstream")
        return output

    def clone(self, url: str, destination: str) -> str:
        """Clone ``url`` into ``destination`` and return the destination."""
        self.runner.check(self.runner.run("clone", "--", url, destination), "clone")
        logger.info(f"Cloned {url} into {destination}")
        return destination

    def get_remote_url(self, path: str) -> Optional[str]:
        """URL of the configured remote, or None if there is none."""
        result = self.runner.run_in(path, "remote", "get-url", self.remote_name)
        if not result.ok:
            return None
        return result.text.strip() or None


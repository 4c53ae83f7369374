"""Working copy status: porcelain parsing and the status/diff queries."""

from pathlib import Path
from typing import List, Tuple

from aterm_workspace.models.status import ChangeRecord, FileStatus, RepositoryStatus
from aterm_workspace.services.git.runner import GitRunner
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)

RENAME_SEPARATOR = " -> "


def parse_porcelain_status(
    text: str,
) -> Tuple[List[ChangeRecord], List[ChangeRecord], List[ChangeRecord]]:
    """Split ``git status --porcelain=v1`` output into staged/unstaged/untracked.

    Each line is ``XY <path>`` where X is the index status and Y the working
    tree status; renames carry ``old -> new`` as the path. A path changed in
    both the index and the working tree yields one staged and one unstaged
    record.

    Args:
        text: Raw porcelain output

    Returns:
        Tuple of (staged, unstaged, untracked) record lists
    """
    staged: List[ChangeRecord] = []
    unstaged: List[ChangeRecord] = []
    untracked: List[ChangeRecord] = []

    for line in text.splitlines():
        if len(line) < 3:
            continue

        index_status = line[0]
        worktree_status = line[1]
        path_field = line[3:]

        old_path = None
        path = path_field
        if RENAME_SEPARATOR in path_field:
            old_path, path = path_field.split(RENAME_SEPARATOR, 1)

        if index_status == "?":
            untracked.append(ChangeRecord(path=path, status=FileStatus.UNTRACKED, staged=False))
            continue

        if index_status != " ":
            staged.append(
                ChangeRecord(
                    path=path,
                    status=FileStatus.from_code(index_status),
                    staged=True,
                    old_path=old_path,
                )
            )

        if worktree_status != " ":
            unstaged.append(
                ChangeRecord(
                    path=path,
                    status=FileStatus.from_code(worktree_status),
                    staged=False,
                    old_path=old_path,
                )
            )

    return staged, unstaged, untracked


def parse_ahead_behind(text: str) -> Tuple[int, int]:
    """Parse ``rev-list --left-right --count @{upstream}...HEAD`` output.

    The left count is commits only on the upstream (behind), the right count
    commits only on HEAD (ahead).

    Returns:
        Tuple of (ahead, behind); (0, 0) when the output is not two integers
    """
    parts = text.split()
    if len(parts) != 2:
        return 0, 0
    try:
        behind, ahead = int(parts[0]), int(parts[1])
    except ValueError:
        return 0, 0
    return ahead, behind


def pseudo_diff(file: str, content: str) -> str:
    """Render a new file's content as an all-additions diff."""
    lines = [f"+{line}" for line in content.splitlines()]
    return f"New file: {file}\n\n" + "\n".join(lines)


class StatusService:
    """Read-only queries about a working copy."""

    def __init__(self, runner: GitRunner):
        self.runner = runner

    def get_current_branch(self, path: str) -> str:
        """Name of the checked-out branch; empty when HEAD is detached."""
        result = self.runner.run_in(path, "branch", "--show-current")
        return result.text.strip()

    def get_ahead_behind(self, path: str) -> Tuple[int, int]:
        """Commits ahead of and behind the upstream; (0, 0) without one."""
        result = self.runner.run_in(
            path, "rev-list", "--left-right", "--count", "@{upstream}...HEAD"
        )
        if not result.ok:
            logger.debug(f"No upstream for {path}: {result.error_message()}")
            return 0, 0
        return parse_ahead_behind(result.text)

    def get_status(self, path: str) -> RepositoryStatus:
        """Get branch, tracking counts and partitioned file changes.

        Args:
            path: Repository working directory

        Returns:
            RepositoryStatus for the working copy

        Raises:
            GitCommandFailed: ``git status`` itself failed
        """
        branch = self.get_current_branch(path)
        ahead, behind = self.get_ahead_behind(path)
        text = self.runner.output_in(path, "status", "status", "--porcelain=v1")
        staged, unstaged, untracked = parse_porcelain_status(text)

        logger.debug(
            f"Status for {path}: {len(staged)} staged, {len(unstaged)} unstaged, "
            f"{len(untracked)} untracked"
        )
        return RepositoryStatus(
            branch=branch,
            ahead=ahead,
            behind=behind,
            staged=staged,
            unstaged=unstaged,
            untracked=untracked,
        )

    def get_file_diff(self, path: str, file: str, staged: bool = False) -> str:
        """Unified diff of one file against the index (or HEAD when ``staged``).

        Untracked files produce no diff output; for those the file's content
        is returned as a pseudo-diff with every line prefixed ``+``.
        """
        args = ["diff"]
        if staged:
            args.append("--staged")
        args.extend(["--", file])
        result = self.runner.run_in(path, *args)

        if not result.stdout:
            file_path = Path(path) / file
            if file_path.is_file():
                content = file_path.read_bytes().decode("utf-8", errors="replace")
                return pseudo_diff(file, content)

        return self.runner.check(result, "diff").text

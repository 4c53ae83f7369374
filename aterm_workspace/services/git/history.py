"""Commit history: log aggregation and per-commit file listings."""

import re
import time
from typing import Dict, List, Optional, Tuple

from aterm_workspace.formatters.date import format_relative_time
from aterm_workspace.models.commit import CommitFileChange, CommitFileStatus, CommitSummary
from aterm_workspace.services.git.runner import GitRunner
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)

LOG_FORMAT = "%H|%h|%s|%an|%ct"
LOG_FIELD_SEPARATOR = "|"

_COUNT_RE = re.compile(r"^(\d+|-)$")
_BRACED_RENAME_RE = re.compile(r"^(.*)\{(.*) => (.*)\}(.*)$")
_SHORTSTAT_RE = re.compile(r"^\s*\d+ files? changed")


def parse_log(text: str, now: int) -> List[CommitSummary]:
    """Parse ``git log --format=%H|%h|%s|%an|%ct`` output.

    Order is preserved as git printed it (newest first). The subject may
    itself contain ``|``, so hash fields are taken from the left and
    author/timestamp from the right.

    Args:
        text: Raw log output, one commit per line
        now: Current time in epoch seconds, for the relative age label

    Returns:
        CommitSummary list with zeroed diffstat counts
    """
    commits = []
    for line in text.splitlines():
        parts = line.split(LOG_FIELD_SEPARATOR)
        if len(parts) < 5:
            continue

        try:
            timestamp = int(parts[-1])
        except ValueError:
            timestamp = 0

        commits.append(
            CommitSummary(
                hash=parts[0],
                short_hash=parts[1],
                subject=LOG_FIELD_SEPARATOR.join(parts[2:-2]),
                author=parts[-2],
                timestamp=timestamp,
                relative_time=format_relative_time(now - timestamp),
            )
        )
    return commits


def _count_before(tokens: List[str], index: int) -> int:
    if index == 0:
        return 0
    try:
        return int(tokens[index - 1])
    except ValueError:
        return 0


def parse_shortstat(text: str) -> Tuple[int, int, int]:
    """Extract totals from a diffstat summary line.

    Looks for the trailing summary line, such as
    ``3 files changed, 10 insertions(+), 2 deletions(-)``, and reads the
    integer just before each keyword. Per-file lines above it are ignored
    even when a file name contains "changed". Missing keywords count as zero.

    Returns:
        Tuple of (files_changed, additions, deletions)
    """
    files_changed = additions = deletions = 0
    for line in reversed(text.splitlines()):
        if not _SHORTSTAT_RE.match(line):
            continue

        tokens = line.split()
        for i, token in enumerate(tokens):
            if token in ("file", "files"):
                files_changed = _count_before(tokens, i)
            elif "insertion" in token:
                additions = _count_before(tokens, i)
            elif "deletion" in token:
                deletions = _count_before(tokens, i)
        break

    return files_changed, additions, deletions


def _numstat_path(raw: str) -> str:
    """Final path of a numstat entry, resolving ``old => new`` rename notation."""
    match = _BRACED_RENAME_RE.match(raw)
    if match:
        prefix, _, new, suffix = match.groups()
        return (prefix + new + suffix).replace("//", "/")
    if " => " in raw:
        return raw.split(" => ", 1)[1]
    return raw


def _parse_count(value: str) -> int:
    # Binary files report "-"
    try:
        return int(value)
    except ValueError:
        return 0


def parse_commit_files(text: str) -> List[CommitFileChange]:
    """Join ``--numstat`` and ``--name-status`` output of one commit by path.

    The first pass maps each numstat path to its (additions, deletions); the
    second walks the name-status lines and looks up counts under the final
    path (the new name for renames). Paths without numstat counts get zeros.

    Args:
        text: Combined output of ``git show --numstat --name-status --format=``

    Returns:
        One CommitFileChange per name-status line
    """
    lines = text.splitlines()

    counts: Dict[str, Tuple[int, int]] = {}
    for line in lines:
        parts = line.split("\t")
        if len(parts) == 3 and _COUNT_RE.match(parts[0]) and _COUNT_RE.match(parts[1]):
            counts[_numstat_path(parts[2])] = (_parse_count(parts[0]), _parse_count(parts[1]))

    files = []
    for line in lines:
        parts = line.split("\t")
        if len(parts) < 2 or not parts[0] or not parts[0][0].isalpha():
            continue

        # Rename and copy codes carry a similarity score, e.g. "R100"
        status_code = parts[0][0]
        file_path = parts[2] if len(parts) >= 3 else parts[1]
        additions, deletions = counts.get(file_path, (0, 0))

        files.append(
            CommitFileChange(
                path=file_path,
                status=CommitFileStatus.from_code(status_code),
                additions=additions,
                deletions=deletions,
            )
        )

    return files


class HistoryService:
    """Queries over a repository's commit history."""

    def __init__(self, runner: GitRunner):
        self.runner = runner

    def get_commit_stats(self, path: str, commit_hash: str) -> Tuple[int, int, int]:
        """Diffstat totals of a single commit; zeros if git cannot produce them."""
        result = self.runner.run_in(
            path, "show", "--stat", "--format=", "--end-of-options", commit_hash
        )
        if not result.ok:
            logger.debug(f"Could not get stats for {commit_hash}: {result.error_message()}")
            return 0, 0, 0
        return parse_shortstat(result.text)

    def get_commit_history(
        self, path: str, limit: int, now: Optional[int] = None
    ) -> List[CommitSummary]:
        """Get up to ``limit`` commits reachable from HEAD, newest first.

        Each commit is enriched with its diffstat through one extra ``git
        show`` per commit, so the cost grows with ``limit``.

        Args:
            path: Repository working directory
            limit: Maximum number of commits
            now: Reference time in epoch seconds (defaults to the current time)

        Raises:
            GitCommandFailed: ``git log`` failed, e.g. on a repository with no commits
        """
        text = self.runner.output_in(
            path, "log", "log", f"--format={LOG_FORMAT}", f"-n{limit}"
        )
        if now is None:
            now = int(time.time())

        commits = parse_log(text, now)
        for commit in commits:
            files_changed, additions, deletions = self.get_commit_stats(path, commit.hash)
            commit.files_changed = files_changed
            commit.additions = additions
            commit.deletions = deletions

        logger.debug(f"Loaded {len(commits)} commits from {path}")
        return commits

    def get_commit_files(self, path: str, commit_hash: str) -> List[CommitFileChange]:
        """Files touched by a commit with per-file line counts.

        git drops ``--numstat`` output when ``--name-status`` is also given,
        so the two listings come from separate calls and are joined here.
        """
        numstat = self.runner.output_in(
            path, "show", "show", "--numstat", "--format=", "--end-of-options", commit_hash
        )
        name_status = self.runner.output_in(
            path, "show", "show", "--name-status", "--format=", "--end-of-options", commit_hash
        )
        return parse_commit_files(numstat + "\n" + name_status)

    def get_commit_diff(self, path: str, commit_hash: str, file: Optional[str] = None) -> str:
        """Unified diff of a whole commit, or of one file within it."""
        # A hash starting with "-" must not be read as an option
        args = ["show", "--end-of-options", commit_hash]
        if file:
            args.extend(["--", file])
        return self.runner.output_in(path, "show", *args)

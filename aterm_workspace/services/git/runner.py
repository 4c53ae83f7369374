"""Process invocation for git commands.

Every git call in the package goes through ``GitRunner``. It wraps
GitPython's ``Git.execute`` so that spawning, output capture and exit
status handling live in one place, and it never raises for a non-zero exit
on its own: callers decide whether a failure is fatal.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from git.cmd import Git
from git.exc import GitCommandNotFound

from aterm_workspace.exceptions import GitCommandFailed, GitNotFoundError
from aterm_workspace.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of a finished process."""

    args: Tuple[str, ...]
    status: int
    stdout: bytes
    stderr: str

    @property
    def ok(self) -> bool:
        return self.status == 0

    @property
    def text(self) -> str:
        """Standard output decoded as UTF-8, replacing invalid bytes."""
        return self.stdout.decode("utf-8", errors="replace")

    def error_message(self) -> str:
        stderr = self.stderr.strip()
        if stderr:
            return stderr
        return f"exit code {self.status}"


def run_process(
    executable: str, args: Sequence[str], cwd: Optional[str] = None
) -> ProcessResult:
    """Run ``executable`` with ``args`` to completion and capture its output.

    Args:
        executable: Program to spawn
        args: Ordered argument list
        cwd: Working directory, or None for the current one

    Returns:
        ProcessResult with raw stdout, decoded stderr and the exit status

    Raises:
        GitNotFoundError: The program could not be spawned at all
    """
    command = [executable, *args]
    logger.debug(f"Running: {' '.join(command)}" + (f" (in {cwd})" if cwd else ""))
    try:
        status, stdout, stderr = Git(cwd).execute(
            command,
            with_extended_output=True,
            with_exceptions=False,
            stdout_as_string=False,
            strip_newline_in_stdout=False,
        )
    except GitCommandNotFound as e:
        logger.debug(f"Could not spawn {executable}: {e}")
        raise GitNotFoundError(executable, str(e.stderr or e).strip() or None) from e
    except OSError as e:
        # Present but not runnable, e.g. permission denied
        logger.debug(f"Could not spawn {executable}: {e}")
        raise GitNotFoundError(executable, str(e)) from e

    if status != 0:
        logger.debug(f"{executable} {args[0] if args else ''} exited with {status}: {stderr.strip()}")

    return ProcessResult(
        args=tuple(command),
        status=status,
        stdout=stdout or b"",
        stderr=stderr or "",
    )


class GitRunner:
    """Runs git commands against a repository given by path.

    The runner holds no repository state; each call names the path it works
    on and spawns exactly one process.
    """

    def __init__(self, executable: str = "git"):
        """Initialize the runner.

        Args:
            executable: Name or path of the git binary
        """
        self.executable = executable

    def run(self, *args: str, cwd: Optional[str] = None) -> ProcessResult:
        """Run ``git <args>`` without a repository context."""
        return run_process(self.executable, args, cwd=cwd)

    def run_in(self, path: str, *args: str) -> ProcessResult:
        """Run ``git -C <path> <args>``."""
        return run_process(self.executable, ["-C", path, *args])

    @staticmethod
    def check(result: ProcessResult, operation: str) -> ProcessResult:
        """Raise GitCommandFailed unless ``result`` exited with status zero."""
        if not result.ok:
            raise GitCommandFailed(operation, result.stderr.strip() or None, result.status)
        return result

    def output_in(self, path: str, operation: str, *args: str) -> str:
        """Run ``git -C <path> <args>``, require success and return stdout text."""
        return self.check(self.run_in(path, *args), operation).text

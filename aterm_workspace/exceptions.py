"""Custom exceptions for aterm-workspace"""

from typing import Optional


class WorkspaceError(Exception):
    """Base exception for all aterm-workspace errors."""
    pass


class GitNotFoundError(WorkspaceError):
    """Exception raised when the git executable cannot be spawned."""

    def __init__(self, executable: str, message: Optional[str] = None):
        self.executable = executable
        self.message = message

        error_msg = f"Could not run '{executable}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitCommandFailed(WorkspaceError):
    """Exception raised when a git command exits with a non-zero status.

    The message is git's own stderr whenever it produced any, so callers can
    show it to the user unchanged.
    """

    def __init__(self, operation: str, message: Optional[str] = None, status: Optional[int] = None):
        self.operation = operation
        self.status = status
        self.message = message

        if message:
            error_msg = message
        elif status is not None:
            error_msg = f"git {operation} failed with exit code {status}"
        else:
            error_msg = f"git {operation} failed"

        super().__init__(error_msg)


class NotAGitRepositoryError(WorkspaceError):
    """Exception raised when a path is not inside a git working tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("Not a git repository")


class InvalidProjectPathError(WorkspaceError):
    """Exception raised when a project path cannot host sibling worktrees."""
    pass


class WorktreeNameExhaustedError(WorkspaceError):
    """Exception raised when no free worktree name could be found."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Failed to generate unique worktree path")


class PreservedFileCopyError(WorkspaceError):
    """Exception raised when a preserved file cannot be copied into a worktree."""

    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"Failed to copy {name}: {reason}")


class FileOperationError(WorkspaceError):
    """Exception raised for file read, write or editor launch failures."""
    pass


class ConfigError(WorkspaceError):
    """Exception raised when the configuration file cannot be read or written."""
    pass


class TerminalProfilesError(WorkspaceError):
    """Exception raised when terminal profiles cannot be read."""
    pass

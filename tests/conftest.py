"""Pytest fixtures for aterm-workspace tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from aterm_workspace.config import Config
from aterm_workspace.core import Workspace
from aterm_workspace.services.git.runner import GitRunner, ProcessResult


def make_result(stdout="", status=0, stderr="", args=("git",)):
    """Build a ProcessResult the way GitRunner returns it."""
    if isinstance(stdout, str):
        stdout = stdout.encode("utf-8")
    return ProcessResult(args=tuple(args), status=status, stdout=stdout, stderr=stderr)


def commit_file(repo, name, content, message):
    """Write a file in the repo's working tree and commit it."""
    path = Path(repo.working_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    """Default engine settings."""
    return Config()


@pytest.fixture
def workspace(config):
    """Workspace backend using the real git executable."""
    return Workspace(config)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing.

    The repository lives at ``<temp_dir>/proj`` so that worktrees created
    from it land under ``<temp_dir>/worktrees/proj``.
    """
    repo_path = temp_dir / "proj"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_history(git_repo):
    """Repository with three commits touching different files."""
    repo = git_repo
    commit_file(repo, "app.py", "print('one')\nprint('two')\n", "Add app")
    commit_file(repo, "app.py", "print('one')\n", "Trim app | keep first line")
    yield repo


@pytest.fixture
def git_repo_with_origin(git_repo, temp_dir):
    """Repository with a bare ``origin`` remote that has not been pushed to."""
    remote_path = temp_dir / "origin.git"
    git.Repo.init(remote_path, bare=True).close()
    git_repo.create_remote("origin", str(remote_path))
    yield git_repo


@pytest.fixture
def mock_runner():
    """Create a mock GitRunner whose check() behaves like the real one."""
    runner = Mock(spec=GitRunner)
    runner.executable = "git"
    runner.check.side_effect = GitRunner.check
    runner.output_in.side_effect = lambda path, operation, *args: GitRunner.check(
        runner.run_in(path, *args), operation
    ).text
    return runner

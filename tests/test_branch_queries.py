"""Tests for branch and worktree inventory parsing"""
import os

import pytest

from aterm_workspace.exceptions import GitCommandFailed, NotAGitRepositoryError
from aterm_workspace.models.worktree import DETACHED, WorktreeInfo
from aterm_workspace.services.git.branch_queries import (
    BranchQueries,
    parse_branch_list,
    parse_worktree_list,
)
from aterm_workspace.services.git.runner import GitRunner
from tests.conftest import make_result


class TestParseWorktreeList:
    """Test parsing of porcelain worktree listings."""

    def test_two_entries(self):
        text = (
            "worktree /repo/main\n"
            "HEAD abc123\n"
            "branch refs/heads/main\n"
            "\n"
            "worktree /repo/feature\n"
            "HEAD def456\n"
            "branch refs/heads/aterm/feature-x-1a2\n"
            "\n"
        )

        assert parse_worktree_list(text) == [
            WorktreeInfo("/repo/main", "main"),
            WorktreeInfo("/repo/feature", "aterm/feature-x-1a2"),
        ]

    def test_detached_entry(self):
        text = "worktree /repo/main\nHEAD abc\nbranch refs/heads/main\n\nworktree /tmp/x\nHEAD def\ndetached\n"

        worktrees = parse_worktree_list(text)

        assert worktrees[1].branch == DETACHED
        assert worktrees[1].is_detached

    def test_entries_without_blank_separators(self):
        """Test entries are split on 'worktree' lines alone."""
        text = "worktree /a\nHEAD 1\nbranch refs/heads/a\nworktree /b\nHEAD 2\nbranch refs/heads/b"

        assert [w.path for w in parse_worktree_list(text)] == ["/a", "/b"]
        assert [w.branch for w in parse_worktree_list(text)] == ["a", "b"]

    def test_bare_and_missing_branch(self):
        """Test an entry with no branch line is reported as detached."""
        text = "worktree /repo.git\nbare\n"
        assert parse_worktree_list(text) == [WorktreeInfo("/repo.git", DETACHED)]

    def test_empty_output(self):
        assert parse_worktree_list("") == []


class TestParseBranchList:
    """Test branch name listing."""

    def test_sorted_and_filtered(self):
        assert parse_branch_list("main\n\nfeature/b\n  aterm/a-123 \nfeature/a\n") == [
            "aterm/a-123",
            "feature/a",
            "feature/b",
            "main",
        ]


class TestBranchQueries:
    """Test branch queries with real and mocked git."""

    def test_list_branches(self, git_repo, workspace):
        git_repo.git.branch("zeta")
        git_repo.git.branch("alpha/one")

        assert workspace.list_branches(git_repo.working_dir) == ["alpha/one", "main", "zeta"]

    def test_list_worktrees_main_first(self, git_repo, workspace):
        created = workspace.create_worktree(git_repo.working_dir, "listed")

        worktrees = workspace.list_worktrees(git_repo.working_dir)

        assert [os.path.realpath(w.path) for w in worktrees] == [
            os.path.realpath(git_repo.working_dir),
            os.path.realpath(created.path),
        ]
        assert [w.branch for w in worktrees] == ["main", created.branch]

    def test_list_worktrees_from_linked_worktree(self, git_repo, workspace):
        created = workspace.create_worktree(git_repo.working_dir, "linked")

        worktrees = workspace.list_worktrees(created.path)

        assert len(worktrees) == 2

    def test_not_a_repository(self, temp_dir, workspace):
        with pytest.raises(NotAGitRepositoryError) as exc_info:
            workspace.list_branches(str(temp_dir))

        assert str(exc_info.value) == "Not a git repository"

    def test_detached_current_branch(self, mock_runner):
        mock_runner.run_in.return_value = make_result("\n")
        assert BranchQueries(mock_runner).get_current_branch("/repo") == "HEAD"

    def test_current_branch_failure(self, mock_runner):
        mock_runner.run_in.return_value = make_result(status=128, stderr="fatal")
        with pytest.raises(GitCommandFailed):
            BranchQueries(mock_runner).get_current_branch("/repo")

    def test_branch_exists_checks_exact_ref(self, git_repo):
        queries = BranchQueries(GitRunner())

        assert queries.branch_exists(git_repo.working_dir, "main")
        assert not queries.branch_exists(git_repo.working_dir, "mai")

"""Tests for the command-line interface"""
import io
import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from aterm_workspace.cli import main, parse_args


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_dir):
    """Keep the CLI away from the real user configuration."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))


class TestParseArgs:
    """Test argument parsing."""

    def test_global_options(self):
        args = parse_args(["-C", "/repo", "--json", "log", "-n", "5"])

        assert args.path == "/repo"
        assert args.json
        assert args.command == "log"
        assert args.limit == 5

    def test_worktree_create(self):
        args = parse_args(["worktree", "create", "Fix bug", "--base", "develop"])

        assert args.worktree_command == "create"
        assert args.task == "Fix bug"
        assert args.base == "develop"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Test command dispatch and exit codes."""

    def test_status_clean(self, git_repo, capsys):
        assert main(["-C", git_repo.working_dir, "status"]) == 0

        out = capsys.readouterr().out
        assert "main" in out
        assert "working tree clean" in out

    def test_status_json(self, git_repo, capsys):
        (Path(git_repo.working_dir) / "new.txt").write_text("x\n")

        assert main(["-C", git_repo.working_dir, "--json", "status"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["branch"] == "main"
        assert [r["path"] for r in data["untracked"]] == ["new.txt"]

    def test_stage_and_commit(self, git_repo, capsys):
        (Path(git_repo.working_dir) / "new.txt").write_text("x\n")

        assert main(["-C", git_repo.working_dir, "stage", "new.txt"]) == 0
        assert main(["-C", git_repo.working_dir, "commit", "-m", "Add new"]) == 0

        assert git_repo.head.commit.message.strip() == "Add new"

    def test_worktree_create_and_list_json(self, git_repo, capsys):
        assert main(["-C", git_repo.working_dir, "--json", "worktree", "create", "cli task"]) == 0
        created = json.loads(capsys.readouterr().out)
        assert created["branch"].startswith("aterm/cli-task-")

        assert main(["-C", git_repo.working_dir, "--json", "worktree", "list"]) == 0
        listed = json.loads(capsys.readouterr().out)
        assert [w["branch"] for w in listed] == ["main", created["branch"]]

    def test_error_exit_code(self, temp_dir, capsys):
        plain = temp_dir / "plain"
        plain.mkdir()

        assert main(["-C", str(plain), "branches"]) == 1

        assert "Not a git repository" in capsys.readouterr().out

    def test_config_show_empty(self, capsys):
        assert main(["config", "show"]) == 0
        assert "No configuration saved yet" in capsys.readouterr().out


class TestFileCommands:
    """Test the cat, write and open commands."""

    def test_cat_relative_to_path(self, temp_dir, capsys):
        (temp_dir / "notes.md").write_text("# Notes\n- [x] done\n")

        assert main(["-C", str(temp_dir), "cat", "notes.md"]) == 0

        assert capsys.readouterr().out == "# Notes\n- [x] done\n"

    def test_cat_missing_file(self, temp_dir, capsys):
        assert main(["-C", str(temp_dir), "cat", "missing.md"]) == 1
        assert "Could not read" in capsys.readouterr().out

    def test_write_from_stdin(self, temp_dir, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("new content\n"))

        assert main(["-C", str(temp_dir), "write", "out.txt"]) == 0

        assert (temp_dir / "out.txt").read_text() == "new content\n"

    def test_open_launches_editor(self, temp_dir):
        with patch("aterm_workspace.services.file_service.subprocess.Popen") as mock_popen:
            assert main(["-C", str(temp_dir), "open", "a.py", "--editor", "cursor"]) == 0

        assert mock_popen.call_args[0][0] == ["cursor", os.path.join(str(temp_dir), "a.py")]

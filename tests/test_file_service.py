"""Tests for file reading, writing and editor launching"""
import subprocess
from unittest.mock import patch

import pytest

from aterm_workspace.exceptions import FileOperationError
from aterm_workspace.services.file_service import (
    editor_command,
    open_in_editor,
    read_file,
    write_file,
)


class TestReadWrite:
    """Test plain file access."""

    def test_write_then_read(self, temp_dir):
        path = str(temp_dir / "notes.md")
        write_file(path, "# Notes\nünïcode\n")
        assert read_file(path) == "# Notes\nünïcode\n"

    def test_read_missing(self, temp_dir):
        with pytest.raises(FileOperationError):
            read_file(str(temp_dir / "missing.txt"))

    def test_read_binary(self, temp_dir):
        path = temp_dir / "blob.bin"
        path.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(FileOperationError):
            read_file(str(path))

    def test_write_into_missing_directory(self, temp_dir):
        with pytest.raises(FileOperationError):
            write_file(str(temp_dir / "no" / "such" / "file.txt"), "x")


class TestEditorCommand:
    """Test editor selection."""

    @pytest.mark.parametrize(
        "editor,program",
        [("vscode", "code"), ("code", "code"), ("cursor", "cursor")],
    )
    def test_known_editors(self, editor, program):
        assert editor_command("/tmp/a.py", editor) == [program, "/tmp/a.py"]

    def test_fallback_macos(self, monkeypatch):
        monkeypatch.setattr("aterm_workspace.services.file_service.sys.platform", "darwin")
        assert editor_command("/tmp/a.py", "vim") == ["open", "-t", "/tmp/a.py"]

    def test_fallback_linux(self, monkeypatch):
        monkeypatch.setattr("aterm_workspace.services.file_service.sys.platform", "linux")
        assert editor_command("/tmp/a.py") == ["xdg-open", "/tmp/a.py"]


class TestOpenInEditor:
    """Test editor launching without starting real processes."""

    @patch("aterm_workspace.services.file_service.subprocess.Popen")
    def test_launch_is_detached(self, mock_popen):
        open_in_editor("/tmp/a.py", "cursor")

        args, kwargs = mock_popen.call_args
        assert args[0] == ["cursor", "/tmp/a.py"]
        assert kwargs["start_new_session"] is True
        assert kwargs["stdout"] == subprocess.DEVNULL

    @patch(
        "aterm_workspace.services.file_service.subprocess.Popen",
        side_effect=FileNotFoundError("code"),
    )
    def test_launch_failure(self, mock_popen):
        with pytest.raises(FileOperationError):
            open_in_editor("/tmp/a.py", "code")

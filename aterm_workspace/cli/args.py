"""Command-line argument parsing for aterm-workspace."""

import argparse
from typing import List, Optional

from aterm_workspace.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="aterm-workspace",
        description="Inspect git working copies and manage parallel task worktrees",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"aterm-workspace {__version__}")
    parser.add_argument(
        "-C",
        "--path",
        default=".",
        help="Repository or project directory (default: current directory)",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sub.add_parser("status", help="Show branch, tracking and file changes")

    p = sub.add_parser("diff", help="Show the diff of one file")
    p.add_argument("file")
    p.add_argument("--staged", action="store_true", help="Diff the index against HEAD")

    p = sub.add_parser("stage", help="Stage files")
    p.add_argument("files", nargs="*")
    p.add_argument("-A", "--all", action="store_true", help="Stage every change")

    p = sub.add_parser("unstage", help="Unstage files")
    p.add_argument("files", nargs="*")
    p.add_argument("-A", "--all", action="store_true", help="Unstage everything")

    p = sub.add_parser("discard", help="Discard local changes to a file")
    p.add_argument("file")
    p.add_argument("--untracked", action="store_true", help="Delete an untracked file")

    p = sub.add_parser("commit", help="Commit staged changes")
    p.add_argument("-m", "--message", required=True)

    sub.add_parser("push", help="Push the current branch, setting upstream if needed")

    p = sub.add_parser("log", help="Show recent commits with stats")
    p.add_argument("-n", "--limit", type=int, default=None, metavar="N")

    p = sub.add_parser("show", help="Show a commit's files or diff")
    p.add_argument("hash")
    p.add_argument("file", nargs="?")
    p.add_argument("--files", action="store_true", help="List changed files instead of the diff")

    p = sub.add_parser("clone", help="Clone a repository")
    p.add_argument("url")
    p.add_argument("destination")

    sub.add_parser("remote", help="Show the remote URL")

    p = sub.add_parser("worktree", help="Manage task worktrees")
    wt = p.add_subparsers(dest="worktree_command", metavar="ACTION")
    wt.required = True
    c = wt.add_parser("create", help="Create a worktree for a task")
    c.add_argument("task", help="Task name, used for the branch and directory")
    c.add_argument("--base", default=None, help="Base ref (default: current branch)")
    r = wt.add_parser("remove", help="Force-remove a worktree by its path")
    r.add_argument("worktree_path")
    wt.add_parser("list", help="List worktrees of the project")
    wt.add_parser("prune", help="Prune metadata of deleted worktrees")

    sub.add_parser("branches", help="List local branches")

    p = sub.add_parser("ls", help="List a directory")
    p.add_argument("directory", nargs="?", default=None)

    p = sub.add_parser("cat", help="Print a file")
    p.add_argument("file", help="File path, relative to the -C directory")

    p = sub.add_parser("write", help="Replace a file with standard input")
    p.add_argument("file", help="File path, relative to the -C directory")

    p = sub.add_parser("open", help="Open a file in an external editor")
    p.add_argument("file", help="File path, relative to the -C directory")
    p.add_argument(
        "--editor", default=None, help="code, vscode or cursor (default: system text editor)"
    )

    sub.add_parser("profiles", help="List iTerm2 profiles")

    p = sub.add_parser("config", help="Show stored configuration")
    cfg = p.add_subparsers(dest="config_command", metavar="ACTION")
    cfg.required = True
    cfg.add_parser("show", help="Print the stored configuration")
    cfg.add_parser("path", help="Print the configuration file location")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)

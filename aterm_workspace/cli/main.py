"""Command-line entry point for aterm-workspace"""

import json
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.markup import escape
from rich.text import Text

from aterm_workspace.cli.args import parse_args
from aterm_workspace.config import ConfigStore, get_config_path
from aterm_workspace.constants import CLI_COLORS, COMMIT_FILE_STATUS_SYMBOLS, DIFF_LINE_STYLES
from aterm_workspace.core import Workspace
from aterm_workspace.exceptions import WorkspaceError
from aterm_workspace.formatters import format_branch_line, format_change, format_timestamp, section_style
from aterm_workspace.logging_config import setup_logging
from aterm_workspace.services.directory_service import list_directory
from aterm_workspace.services.file_service import open_in_editor, read_file, write_file
from aterm_workspace.services.terminal_profiles import get_terminal_profiles

console = Console()


def _print_json(value) -> None:
    # soft_wrap keeps long paths from being cropped to the terminal width
    console.print(json.dumps(value, indent=2), markup=False, highlight=False, soft_wrap=True)


def _print_diff(diff: str) -> None:
    for line in diff.splitlines():
        style = DIFF_LINE_STYLES.get(line[:1]) if not line.startswith(("+++", "---")) else "bold"
        console.print(Text(line, style=style or ""))


def cmd_status(workspace: Workspace, args) -> None:
    status = workspace.get_status(args.path)
    if args.json:
        _print_json(status.to_dict())
        return

    console.print(format_branch_line(status))
    if status.is_clean:
        console.print("[dim]Nothing to commit, working tree clean[/dim]")
        return

    for section, records in (
        ("staged", status.staged),
        ("unstaged", status.unstaged),
        ("untracked", status.untracked),
    ):
        if not records:
            continue
        style = section_style(section)
        console.print(f"\n[bold]{section.capitalize()}[/bold] ({len(records)})")
        for record in records:
            console.print(Text(f"  {format_change(record)}", style=style or ""))


def cmd_diff(workspace: Workspace, args) -> None:
    _print_diff(workspace.get_file_diff(args.path, args.file, args.staged))


def cmd_stage(workspace: Workspace, args) -> None:
    if args.all:
        workspace.stage_all(args.path)
    else:
        workspace.stage_files(args.path, args.files)


def cmd_unstage(workspace: Workspace, args) -> None:
    if args.all:
        workspace.unstage_all(args.path)
    else:
        workspace.unstage_files(args.path, args.files)


def cmd_discard(workspace: Workspace, args) -> None:
    workspace.discard_changes(args.path, args.file, args.untracked)


def cmd_commit(workspace: Workspace, args) -> None:
    console.print(workspace.commit(args.path, args.message), end="", markup=False, highlight=False)


def cmd_push(workspace: Workspace, args) -> None:
    output = workspace.push(args.path)
    if output:
        console.print(output, end="", markup=False, highlight=False)
    console.print("[green]Pushed[/green]")


def cmd_log(workspace: Workspace, args) -> None:
    commits = workspace.get_commit_history(args.path, args.limit)
    if args.json:
        _print_json([c.to_dict() for c in commits])
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Commit", style=CLI_COLORS["hash"], no_wrap=True)
    table.add_column("Subject")
    table.add_column("Author")
    table.add_column("When", no_wrap=True)
    table.add_column("Files", justify="right")
    table.add_column("+", justify="right", style=CLI_COLORS["additions"])
    table.add_column("-", justify="right", style=CLI_COLORS["deletions"])
    for c in commits:
        table.add_row(
            c.short_hash,
            escape(c.subject),
            escape(c.author),
            f"{c.relative_time} ({format_timestamp(c.timestamp)})",
            str(c.files_changed),
            str(c.additions),
            str(c.deletions),
        )
    console.print(table)


def cmd_show(workspace: Workspace, args) -> None:
    if not args.files:
        _print_diff(workspace.get_commit_diff(args.path, args.hash, args.file))
        return

    files = workspace.get_commit_files(args.path, args.hash)
    if args.json:
        _print_json([f.to_dict() for f in files])
        return
    for f in files:
        console.print(
            f"{COMMIT_FILE_STATUS_SYMBOLS[f.status]} {escape(f.path)} "
            f"[{CLI_COLORS['additions']}]+{f.additions}[/] "
            f"[{CLI_COLORS['deletions']}]-{f.deletions}[/]"
        )


def cmd_clone(workspace: Workspace, args) -> None:
    destination = workspace.clone(args.url, args.destination)
    console.print(f"[green]Cloned into {escape(destination)}[/green]")


def cmd_remote(workspace: Workspace, args) -> None:
    url = workspace.get_remote_url(args.path)
    if url is None:
        console.print("[dim]No remote configured[/dim]")
    else:
        console.print(url, markup=False, highlight=False)


def cmd_worktree(workspace: Workspace, args) -> None:
    action = args.worktree_command
    if action == "create":
        info = workspace.create_worktree(args.path, args.task, args.base)
        if args.json:
            _print_json(info.to_dict())
        else:
            console.print(f"[green]Created worktree[/green] {escape(info.path)}")
            console.print(f"  branch [{CLI_COLORS['branch']}]{escape(info.branch)}[/]")
    elif action == "remove":
        workspace.remove_worktree(args.worktree_path)
        console.print(f"[green]Removed worktree {escape(args.worktree_path)}[/green]")
    elif action == "prune":
        workspace.prune_worktrees(args.path)
        console.print("[green]Pruned worktree metadata[/green]")
    else:
        worktrees = workspace.list_worktrees(args.path)
        if args.json:
            _print_json([wt.to_dict() for wt in worktrees])
            return
        table = Table(show_header=True, header_style="bold")
        table.add_column("Branch", style=CLI_COLORS["branch"])
        table.add_column("Path")
        for wt in worktrees:
            table.add_row(escape(wt.branch), escape(wt.path))
        console.print(table)


def cmd_branches(workspace: Workspace, args) -> None:
    branches = workspace.list_branches(args.path)
    if args.json:
        _print_json(branches)
        return
    for branch in branches:
        console.print(branch, markup=False, highlight=False)


def cmd_ls(workspace: Workspace, args) -> None:
    entries = list_directory(args.directory)
    if args.json:
        _print_json([e.to_dict() for e in entries])
        return
    for entry in entries:
        if entry.is_git_repo:
            console.print(f"[{CLI_COLORS['branch']}]{escape(entry.name)}/[/] [dim](git)[/dim]")
        elif entry.is_dir:
            console.print(f"[bold]{escape(entry.name)}/[/bold]")
        else:
            console.print(entry.name, markup=False, highlight=False)


def _file_path(args) -> str:
    return os.path.join(args.path, args.file)


def cmd_cat(workspace: Workspace, args) -> None:
    console.print(
        read_file(_file_path(args)),
        end="",
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


def cmd_write(workspace: Workspace, args) -> None:
    path = _file_path(args)
    write_file(path, sys.stdin.read())
    console.print(f"[green]Wrote {escape(path)}[/green]")


def cmd_open(workspace: Workspace, args) -> None:
    open_in_editor(_file_path(args), args.editor)


def cmd_profiles(workspace: Workspace, args) -> None:
    profiles = get_terminal_profiles()
    if args.json:
        _print_json([p.to_dict() for p in profiles])
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("GUID", style="dim")
    table.add_column("Command")
    table.add_column("Directory")
    for p in profiles:
        table.add_row(
            escape(p.name), p.guid, escape(p.command or ""), escape(p.working_directory or "")
        )
    console.print(table)


def cmd_config(workspace: Workspace, args) -> None:
    if args.config_command == "path":
        console.print(str(get_config_path()))
        return
    data = ConfigStore().load()
    if data is None:
        console.print("[dim]No configuration saved yet[/dim]")
    else:
        _print_json(data)


COMMANDS = {
    "status": cmd_status,
    "diff": cmd_diff,
    "stage": cmd_stage,
    "unstage": cmd_unstage,
    "discard": cmd_discard,
    "commit": cmd_commit,
    "push": cmd_push,
    "log": cmd_log,
    "show": cmd_show,
    "clone": cmd_clone,
    "remote": cmd_remote,
    "worktree": cmd_worktree,
    "branches": cmd_branches,
    "ls": cmd_ls,
    "cat": cmd_cat,
    "write": cmd_write,
    "open": cmd_open,
    "profiles": cmd_profiles,
    "config": cmd_config,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        settings = ConfigStore().load_settings()
        workspace = Workspace(settings)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in settings.to_dict().items():
                console.print(f"  {key}: {value}")

        COMMANDS[parsed_args.command](workspace, parsed_args)
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except WorkspaceError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""CLI commands for viewing a file's diff."""

import typer

from easydiff.cli.utils import describe_hunk, fail, load_effective_config, repo_relative_path
from easydiff.diff.parser import parse_diff
from easydiff.git import GitError, get_file_diff, get_repo_root
from easydiff.view.session import DiffSession
from easydiff.view.terminal import TerminalHost


def show_command(
    path: str = typer.Argument(
        ...,
        help="File to show (relative to the current directory)",
    ),
    staged: bool = typer.Option(
        False,
        "--staged",
        "-s",
        help="Show staged changes instead of unstaged ones",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Show a file with its changes highlighted inline."""
    try:
        repo_root = get_repo_root()
    except GitError as e:
        fail(str(e))

    config = load_effective_config(repo_root)
    host = TerminalHost(config, color=not no_color)
    session = DiffSession(host, config, cwd=repo_root)

    if not session.open(auto_select=False):
        raise typer.Exit(1)
    if not session.select_file(repo_relative_path(path, repo_root), staged):
        session.close()
        raise typer.Exit(1)

    for line in host.render_window(session.diff_win):
        typer.echo(line)
    session.close()


def hunks_command(
    path: str = typer.Argument(
        ...,
        help="File whose hunks to list",
    ),
    staged: bool = typer.Option(
        False,
        "--staged",
        "-s",
        help="List hunks of the staged diff",
    ),
) -> None:
    """List the hunks of a file's diff with their line ranges."""
    try:
        repo_root = get_repo_root()
        rel_path = repo_relative_path(path, repo_root)
        parsed = parse_diff(get_file_diff(rel_path, staged=staged, repo_root=repo_root))
    except GitError as e:
        fail(str(e))

    if not parsed.hunks:
        kind = "staged" if staged else "unstaged"
        typer.echo(f"No {kind} hunks in {rel_path}")
        return

    for number, hunk in enumerate(parsed.hunks, start=1):
        typer.echo(describe_hunk(number, hunk))
    typer.echo()
    typer.echo(f"Total: {len(parsed.hunks)} hunk(s)")

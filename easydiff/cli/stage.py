"""CLI commands for staging and unstaging files or single hunks."""

from typing import Optional

import typer

from easydiff.cli.utils import fail, repo_relative_path, select_hunk
from easydiff.diff.parser import parse_diff
from easydiff.git import (
    GitError,
    get_file_diff,
    get_repo_root,
    stage_file,
    stage_hunk,
    unstage_file,
    unstage_hunk,
)


def _check_selectors(hunk: Optional[int], line: Optional[int]) -> None:
    if hunk is not None and line is not None:
        fail("Use either --hunk or --line, not both")


def stage_command(
    path: str = typer.Argument(
        ...,
        help="File to stage",
    ),
    hunk: Optional[int] = typer.Option(
        None,
        "--hunk",
        "-H",
        help="Stage only this hunk (1-based, as listed by 'easydiff hunks')",
    ),
    line: Optional[int] = typer.Option(
        None,
        "--line",
        "-l",
        help="Stage only the hunk covering this line of the working file",
    ),
) -> None:
    """Stage a whole file or a single hunk of it."""
    _check_selectors(hunk, line)
    try:
        repo_root = get_repo_root()
        rel_path = repo_relative_path(path, repo_root)

        if hunk is None and line is None:
            stage_file(rel_path, repo_root)
            typer.echo(f"Staged {rel_path}")
            return

        parsed = parse_diff(get_file_diff(rel_path, staged=False, repo_root=repo_root))
        target = select_hunk(parsed, hunk, line)
        stage_hunk(parsed.header, target.lines, repo_root)
        typer.echo(f"Staged hunk {target.header} in {rel_path}")

    except GitError as e:
        fail(str(e))


def unstage_command(
    path: str = typer.Argument(
        ...,
        help="File to unstage",
    ),
    hunk: Optional[int] = typer.Option(
        None,
        "--hunk",
        "-H",
        help="Unstage only this hunk (1-based, as listed by 'easydiff hunks --staged')",
    ),
    line: Optional[int] = typer.Option(
        None,
        "--line",
        "-l",
        help="Unstage only the hunk covering this line of the staged file",
    ),
) -> None:
    """Unstage a whole file or a single hunk of it."""
    _check_selectors(hunk, line)
    try:
        repo_root = get_repo_root()
        rel_path = repo_relative_path(path, repo_root)

        if hunk is None and line is None:
            unstage_file(rel_path, repo_root)
            typer.echo(f"Unstaged {rel_path}")
            return

        parsed = parse_diff(get_file_diff(rel_path, staged=True, repo_root=repo_root))
        target = select_hunk(parsed, hunk, line)
        unstage_hunk(parsed.header, target.lines, repo_root)
        typer.echo(f"Unstaged hunk {target.header} in {rel_path}")

    except GitError as e:
        fail(str(e))

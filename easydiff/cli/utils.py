"""Shared utility functions for CLI commands."""

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from easydiff.config import ConfigError, EasyDiffConfig, load_config
from easydiff.diff.models import Hunk, ParsedDiff
from easydiff.diff.parser import find_hunk_at_line


def configure_logging(debug: bool) -> None:
    """Configure root logging for a CLI run.

    Args:
        debug: Log git invocations and parser details.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with status 1."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def load_effective_config(repo_root: Optional[Path]) -> EasyDiffConfig:
    """Load configuration, exiting with an error message if it is invalid."""
    try:
        return load_config(repo_root)
    except ConfigError as e:
        fail(str(e))


def repo_relative_path(path: str, repo_root: Path) -> str:
    """Turn a path given on the command line into a repository-relative path.

    git runs from the repository root, so paths typed in a subdirectory
    have to be rebased. Paths outside the repository are returned as given.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    try:
        return candidate.resolve().relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        return path


def select_hunk(
    parsed: ParsedDiff,
    hunk_number: Optional[int],
    line: Optional[int],
) -> Hunk:
    """Pick a hunk by its 1-based number or by a post-image line.

    Exits with an error if no hunk matches.
    """
    if not parsed.hunks:
        fail("No hunks in diff")

    if hunk_number is not None:
        if not 1 <= hunk_number <= len(parsed.hunks):
            fail(f"Hunk {hunk_number} out of range (1-{len(parsed.hunks)})")
        return parsed.hunks[hunk_number - 1]

    _, hunk = find_hunk_at_line(parsed.hunks, line)
    if hunk is None:
        fail(f"No hunk at line {line}")
    return hunk


def describe_hunk(number: int, hunk: Hunk) -> str:
    """One-line summary of a hunk for listings."""
    if hunk.new_count == 0:
        span = f"deletion after line {hunk.new_start}"
    else:
        span = f"lines {hunk.start_line}-{hunk.end_line}"
    return (
        f"[{number}] {span}  "
        f"(+{len(hunk.added_line_numbers)} -{len(hunk.deleted_lines)})  {hunk.header}"
    )

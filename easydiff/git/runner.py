"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- split_output_lines: Split raw git output into lines
- get_repo_root: Get the root directory of the current git repository
- is_git_repo: Check whether a directory is inside a git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from easydiff.git.exceptions import (
    GitCommandError,
    GitError,
    GitNotFoundError,
    NotARepositoryError,
)

logger = logging.getLogger(__name__)


def _run_git_command(
    args: list[str],
    cwd: Optional[Path] = None,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in (defaults to the process cwd).
        strip: Strip surrounding whitespace from stdout. Porcelain and diff
            output must be read unstripped because leading spaces are
            significant there.

    Returns:
        The stdout of the git command.

    Raises:
        GitCommandError: If the command fails.
        GitNotFoundError: If git is not installed.
    """
    logger.debug("Running git %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
    except subprocess.CalledProcessError as e:
        output = (e.stderr or e.stdout or "").strip()
        raise GitCommandError(
            f"Git command failed: git {' '.join(args)}\n{output}",
            args_list=args,
            returncode=e.returncode,
            output=output,
        )
    except FileNotFoundError:
        raise GitNotFoundError("Git is not installed or not in PATH.")

    if strip:
        return result.stdout.strip()
    return result.stdout


def split_output_lines(output: str) -> list[str]:
    """Split raw git output into lines, dropping the final line terminator.

    Only newline characters separate lines, so carriage returns inside
    file content survive untouched.

    Args:
        output: Raw stdout from git.

    Returns:
        List of lines without trailing newline characters.
    """
    if not output:
        return []
    lines = output.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Get the root directory of the current git repository.

    Args:
        cwd: Directory to resolve the repository from.

    Returns:
        Path to the repository root.

    Raises:
        NotARepositoryError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
    except GitNotFoundError:
        raise
    except GitError:
        raise NotARepositoryError(
            "Not in a git repository. Please run this command from within a git repo."
        )
    if not root:
        raise NotARepositoryError(
            "Not in a git repository. Please run this command from within a git repo."
        )
    return Path(root)


def is_git_repo(cwd: Optional[Path] = None) -> bool:
    """Check whether the directory is inside a git work tree.

    Args:
        cwd: Directory to check.

    Returns:
        True if a repository root could be resolved.
    """
    try:
        get_repo_root(cwd)
        return True
    except GitError:
        return False

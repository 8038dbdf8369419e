"""Staging utilities for whole files and single hunks.

Contains:
- stage_file: Add a file to the index
- unstage_file: Restore a file's index entry from HEAD
- apply_cached_patch: Apply patch text to the index through a temp file
- stage_hunk: Stage a single hunk with git apply --cached
- unstage_hunk: Unstage a single hunk with git apply --cached --reverse
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from easydiff.diff.patch import build_hunk_patch
from easydiff.git.exceptions import GitCommandError, PatchApplyError, TempFileError
from easydiff.git.runner import _run_git_command

logger = logging.getLogger(__name__)


def stage_file(filepath: str, repo_root: Optional[Path] = None) -> None:
    """Stage a file.

    Raises:
        GitError: If git add fails.
    """
    _run_git_command(["add", "--", filepath], cwd=repo_root)
    logger.debug("Staged file %s", filepath)


def unstage_file(filepath: str, repo_root: Optional[Path] = None) -> None:
    """Unstage a file.

    Raises:
        GitError: If git restore fails.
    """
    _run_git_command(["restore", "--staged", "--", filepath], cwd=repo_root)
    logger.debug("Unstaged file %s", filepath)


def _write_patch_file(patch_content: str) -> Path:
    """Write patch content to a new temporary file.

    Raises:
        TempFileError: If the file cannot be created or written.
    """
    try:
        fd, name = tempfile.mkstemp(prefix="easydiff_", suffix=".patch")
    except OSError as e:
        raise TempFileError(f"Could not create temp file: {e}")

    patch_file = Path(name)
    try:
        # newline="" keeps "\n" terminators on every platform
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(patch_content)
    except OSError as e:
        patch_file.unlink(missing_ok=True)
        raise TempFileError(f"Could not write temp file {patch_file}: {e}")
    return patch_file


def apply_cached_patch(
    patch_content: str,
    reverse: bool = False,
    repo_root: Optional[Path] = None,
) -> None:
    """Apply a patch to the index.

    The patch is written to a temporary file that is removed whether or not
    git accepts it. git must run from the repository root because the
    `---`/`+++` markers carry root-relative paths.

    Args:
        patch_content: Unified diff text ending with a newline.
        reverse: Apply the patch in reverse (unstage).
        repo_root: The root directory of the git repository.

    Raises:
        TempFileError: If the patch file cannot be written (git is not run).
        PatchApplyError: If git apply rejects the patch.
    """
    patch_file = _write_patch_file(patch_content)
    args = ["apply", "--cached"]
    if reverse:
        args.append("--reverse")
    args.append(str(patch_file))

    try:
        _run_git_command(args, cwd=repo_root)
    except GitCommandError as e:
        raise PatchApplyError(
            str(e), args_list=e.args_list, returncode=e.returncode, output=e.output
        )
    finally:
        patch_file.unlink(missing_ok=True)

    logger.debug("Applied patch to index (reverse=%s)", reverse)


def stage_hunk(
    diff_header: list[str],
    hunk_lines: list[str],
    repo_root: Optional[Path] = None,
) -> None:
    """Stage a single hunk.

    Args:
        diff_header: The file preamble lines of the diff the hunk came from.
        hunk_lines: The hunk lines, starting with its @@ header.
        repo_root: The root directory of the git repository.

    Raises:
        GitError: If the patch cannot be written or applied.
    """
    apply_cached_patch(build_hunk_patch(diff_header, hunk_lines), repo_root=repo_root)


def unstage_hunk(
    diff_header: list[str],
    hunk_lines: list[str],
    repo_root: Optional[Path] = None,
) -> None:
    """Unstage a single hunk taken from a staged diff.

    Raises:
        GitError: If the patch cannot be written or applied.
    """
    apply_cached_patch(
        build_hunk_patch(diff_header, hunk_lines), reverse=True, repo_root=repo_root
    )

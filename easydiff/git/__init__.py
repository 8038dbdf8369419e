"""Git access module for easydiff.

This package provides modular git access with:
- exceptions: GitError, GitNotFoundError, NotARepositoryError, GitCommandError,
              PatchApplyError, TempFileError
- runner: _run_git_command, split_output_lines, get_repo_root, is_git_repo
- status: get_status, parse_porcelain_status
- diff: get_file_diff, show_head, show_staged
- stage: stage_file, unstage_file, apply_cached_patch, stage_hunk, unstage_hunk
"""

# Exceptions
from easydiff.git.exceptions import (
    GitCommandError,
    GitError,
    GitNotFoundError,
    NotARepositoryError,
    PatchApplyError,
    TempFileError,
)

# Runner utilities
from easydiff.git.runner import (
    _run_git_command,
    get_repo_root,
    is_git_repo,
    split_output_lines,
)

# Status utilities
from easydiff.git.status import (
    get_status,
    parse_porcelain_status,
)

# Diff utilities
from easydiff.git.diff import (
    get_file_diff,
    show_head,
    show_staged,
)

# Staging utilities
from easydiff.git.stage import (
    apply_cached_patch,
    stage_file,
    stage_hunk,
    unstage_file,
    unstage_hunk,
)


__all__ = [
    # Exceptions
    "GitError",
    "GitNotFoundError",
    "NotARepositoryError",
    "GitCommandError",
    "PatchApplyError",
    "TempFileError",
    # Runner
    "_run_git_command",
    "split_output_lines",
    "get_repo_root",
    "is_git_repo",
    # Status
    "get_status",
    "parse_porcelain_status",
    # Diff
    "get_file_diff",
    "show_head",
    "show_staged",
    # Stage
    "stage_file",
    "unstage_file",
    "apply_cached_patch",
    "stage_hunk",
    "unstage_hunk",
]

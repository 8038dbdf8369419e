"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- GitNotFoundError: Raised when the git executable is missing
- NotARepositoryError: Raised outside of a git work tree
- GitCommandError: Raised when a git subcommand exits non-zero
- PatchApplyError: Raised when git apply rejects a hunk patch
- TempFileError: Raised when the patch scratch file cannot be written
"""

from typing import Optional


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class GitNotFoundError(GitError):
    """Raised when git is not installed or not in PATH."""

    pass


class NotARepositoryError(GitError):
    """Raised when no repository root can be found."""

    pass


class GitCommandError(GitError):
    """Raised when a git command exits with a non-zero status.

    Attributes:
        args_list: The arguments passed to git.
        returncode: The exit code of the process.
        output: The stderr (or stdout when stderr is empty) of the process.
    """

    def __init__(
        self,
        message: str,
        args_list: Optional[list[str]] = None,
        returncode: int = 1,
        output: str = "",
    ):
        super().__init__(message)
        self.args_list = args_list or []
        self.returncode = returncode
        self.output = output


class PatchApplyError(GitCommandError):
    """Raised when git apply fails for a single hunk patch."""

    pass


class TempFileError(GitError):
    """Raised when the temporary patch file cannot be created or written."""

    pass

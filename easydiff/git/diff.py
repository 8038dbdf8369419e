"""Git diff and file content utilities.

Contains:
- get_file_diff: Get the unstaged or staged diff of a single file
- show_head: Get the content of a file as committed in HEAD
- show_staged: Get the content of a file as recorded in the index
"""

from pathlib import Path
from typing import Optional

from easydiff.git.runner import _run_git_command, split_output_lines


def get_file_diff(
    filepath: str, staged: bool = False, repo_root: Optional[Path] = None
) -> list[str]:
    """Get the diff of a single file.

    Args:
        filepath: Path of the file relative to the repository root.
        staged: Diff the index against HEAD instead of the worktree against the index.
        repo_root: The root directory of the git repository.

    Returns:
        Diff output split into lines (empty when the file has no changes).

    Raises:
        GitError: If git diff fails.
    """
    args = ["diff", "--cached", "--", filepath] if staged else ["diff", "--", filepath]
    return split_output_lines(_run_git_command(args, cwd=repo_root, strip=False))


def show_head(filepath: str, repo_root: Optional[Path] = None) -> list[str]:
    """Get the content of a file from HEAD.

    Raises:
        GitError: If the file does not exist in HEAD.
    """
    output = _run_git_command(["show", f"HEAD:{filepath}"], cwd=repo_root, strip=False)
    return split_output_lines(output)


def show_staged(filepath: str, repo_root: Optional[Path] = None) -> list[str]:
    """Get the staged content of a file.

    Raises:
        GitError: If the file is not in the index.
    """
    output = _run_git_command(["show", f":{filepath}"], cwd=repo_root, strip=False)
    return split_output_lines(output)

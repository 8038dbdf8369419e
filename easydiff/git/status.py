"""Git status utilities.

Contains:
- parse_porcelain_status: Classify porcelain v1 lines into staged/unstaged entries
- get_status: Read and classify the repository status
"""

import logging
from pathlib import Path
from typing import Optional

from easydiff.diff.models import FileEntry, FileStatus, StatusResult
from easydiff.git.runner import _run_git_command, split_output_lines

logger = logging.getLogger(__name__)

RENAME_ARROW = " -> "

# Single-character escapes git uses inside quoted paths
_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    "\"": 0x22,
    "\\": 0x5C,
}
_OCTAL_DIGITS = "01234567"


def _read_path(text: str, start: int) -> tuple[str, int]:
    """Read one path token of a porcelain line.

    git wraps paths holding spaces, quotes or non-ASCII bytes in double
    quotes and escapes them C-style, with raw bytes as `\\ooo` octal.

    Args:
        text: The path part of a porcelain line.
        start: Index where the token begins.

    Returns:
        Tuple of (path, index just past the token).
    """
    if not text.startswith("\"", start):
        end = text.find(RENAME_ARROW, start)
        if end == -1:
            end = len(text)
        return text[start:end], end

    raw = bytearray()
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\"":
            # Non-UTF-8 names round-trip to git through surrogateescape
            return raw.decode("utf-8", errors="surrogateescape"), i + 1
        if ch == "\\" and i + 1 < len(text):
            escaped = text[i + 1]
            if escaped in _OCTAL_DIGITS:
                end = i + 1
                while end < min(i + 4, len(text)) and text[end] in _OCTAL_DIGITS:
                    end += 1
                raw.append(int(text[i + 1:end], 8) & 0xFF)
                i = end
                continue
            if escaped in _C_ESCAPES:
                raw.append(_C_ESCAPES[escaped])
            else:
                raw.extend(escaped.encode("utf-8"))
            i += 2
            continue
        raw.extend(ch.encode("utf-8"))
        i += 1

    # Unterminated quote: keep the token as printed
    return text[start:], len(text)


def _display_path(raw_path: str) -> str:
    """Return the unquoted path a porcelain token refers to after a rename."""
    path, end = _read_path(raw_path, 0)
    if raw_path.startswith(RENAME_ARROW, end):
        new_path, _ = _read_path(raw_path, end + len(RENAME_ARROW))
        return new_path or path
    return path


def parse_porcelain_status(output: str) -> StatusResult:
    """Parse `git status --porcelain=v1` output.

    The porcelain format uses two columns:
    - First column: index (staged) status
    - Second column: worktree (unstaged) status

    Untracked files appear as `??` and are reported only as unstaged,
    with status `?`. Quoted paths are unescaped into `path`; `raw_path`
    keeps the token as git printed it.

    Args:
        output: Raw porcelain output (unstripped).

    Returns:
        StatusResult with staged and unstaged entries in git's order.
    """
    staged: list[FileEntry] = []
    unstaged: list[FileEntry] = []

    for line in split_output_lines(output):
        # Skip lines that are too short to carry both columns and a path
        if len(line) < 3:
            continue
        # Branch header lines only appear with -b
        if line.startswith("##"):
            continue

        index_status = line[0]
        worktree_status = line[1]
        raw_path = line[3:]
        path = _display_path(raw_path)

        if index_status != " " and index_status != "?":
            staged.append(
                FileEntry(
                    path=path,
                    raw_path=raw_path,
                    status=FileStatus.from_code(index_status),
                    staged=True,
                )
            )

        if worktree_status != " ":
            code = "?" if index_status == "?" else worktree_status
            unstaged.append(
                FileEntry(
                    path=path,
                    raw_path=raw_path,
                    status=FileStatus.from_code(code),
                    staged=False,
                )
            )

    logger.debug("Status: %d staged, %d unstaged", len(staged), len(unstaged))
    return StatusResult(staged=staged, unstaged=unstaged)


def get_status(repo_root: Optional[Path] = None) -> StatusResult:
    """Get the classified git status of the repository.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        StatusResult with staged and unstaged entries.

    Raises:
        GitError: If git status fails.
    """
    output = _run_git_command(["status", "--porcelain=v1"], cwd=repo_root, strip=False)
    return parse_porcelain_status(output)

"""Data models for the easydiff diff module.

Contains:
- FileStatus: Closed set of porcelain status codes
- FileEntry: A changed path from git status
- StatusResult: Staged and unstaged entries of one status read
- DeletedLine: A removed line of a hunk
- Hunk: A single hunk of a unified diff
- ParsedDiff: The preamble and hunks of a single-file diff
"""

from dataclasses import dataclass, field
from enum import Enum


class FileStatus(Enum):
    """Porcelain status of a changed path."""

    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    UNTRACKED = "?"

    @classmethod
    def from_code(cls, code: str) -> "FileStatus":
        """Map a porcelain status letter to a FileStatus.

        Letters outside the known set (such as `T` for a type change) are
        shown as modifications.
        """
        try:
            return cls(code)
        except ValueError:
            return cls.MODIFIED

    @property
    def code(self) -> str:
        """The single-letter porcelain code."""
        return self.value


@dataclass(frozen=True)
class FileEntry:
    """A changed path reported by git status."""

    path: str  # Unquoted target path (new path for renames)
    raw_path: str  # Porcelain token as printed, quoting and "old -> new" included
    status: FileStatus
    staged: bool


@dataclass(frozen=True)
class StatusResult:
    """Staged and unstaged entries from one status read."""

    staged: list[FileEntry] = field(default_factory=list)
    unstaged: list[FileEntry] = field(default_factory=list)

    @property
    def all_files(self) -> list[FileEntry]:
        """All entries in display order (staged first)."""
        return self.staged + self.unstaged

    @property
    def is_clean(self) -> bool:
        return not self.staged and not self.unstaged


@dataclass(frozen=True)
class DeletedLine:
    """A removed line of a hunk."""

    content: str  # Line without the leading '-'
    raw: str  # Line as it appears in the diff


@dataclass
class Hunk:
    """A single hunk of a unified diff.

    `lines[0]` is the @@ header line verbatim; the remaining lines are the
    hunk body with their +/-/space markers.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: list[str]
    deleted_lines: list[DeletedLine] = field(default_factory=list)
    added_line_numbers: list[int] = field(default_factory=list)  # 1-indexed, post-image

    @property
    def header(self) -> str:
        """The @@ ... @@ header line."""
        return self.lines[0]

    @property
    def body(self) -> list[str]:
        return self.lines[1:]

    @property
    def start_line(self) -> int:
        """First post-image line covered by the hunk."""
        return self.new_start

    @property
    def end_line(self) -> int:
        """Last post-image line covered by the hunk.

        For a pure deletion this is `new_start - 1`, i.e. the range is empty.
        """
        return self.new_start + self.new_count - 1

    def contains_line(self, line_num: int) -> bool:
        """Check whether a post-image line falls inside the hunk's range."""
        return self.start_line <= line_num <= self.end_line


@dataclass
class ParsedDiff:
    """A parsed single-file unified diff."""

    header: list[str] = field(default_factory=list)  # diff --git / index / --- / +++
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.hunks

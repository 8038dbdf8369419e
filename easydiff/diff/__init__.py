"""Diff handling for easydiff - parse diffs and rebuild single-hunk patches.

This package provides:
- models: FileStatus, FileEntry, StatusResult, DeletedLine, Hunk, ParsedDiff
- parser: parse_diff, parse_hunk_header, find_hunk_at_line
- patch: build_hunk_patch, build_patch
"""

# Models
from easydiff.diff.models import (
    DeletedLine,
    FileEntry,
    FileStatus,
    Hunk,
    ParsedDiff,
    StatusResult,
)

# Parser
from easydiff.diff.parser import (
    find_hunk_at_line,
    parse_diff,
    parse_hunk_header,
)

# Patch builder
from easydiff.diff.patch import (
    build_hunk_patch,
    build_patch,
)


__all__ = [
    # Models
    "FileStatus",
    "FileEntry",
    "StatusResult",
    "DeletedLine",
    "Hunk",
    "ParsedDiff",
    # Parser
    "parse_diff",
    "parse_hunk_header",
    "find_hunk_at_line",
    # Patch
    "build_hunk_patch",
    "build_patch",
]

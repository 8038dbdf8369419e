"""Diff parser for the easydiff diff module.

Contains functions for parsing unified diff output:
- parse_diff: Parse the diff of a single file into header and hunks
- parse_hunk_header: Parse the ranges of an @@ header line
- find_hunk_at_line: Find the hunk covering a post-image line
"""

import logging
import re
from typing import Optional, Union

from easydiff.diff.models import DeletedLine, Hunk, ParsedDiff

logger = logging.getLogger(__name__)

# Format: @@ -old_start[,old_count] +new_start[,new_count] @@ optional context
HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def parse_hunk_header(line: str) -> Optional[tuple[int, int, int, int]]:
    """Parse a hunk header line.

    Omitted counts default to 1.

    Args:
        line: The @@ header line.

    Returns:
        Tuple of (old_start, old_count, new_start, new_count), or None if
        the line is not a valid hunk header.
    """
    match = HUNK_HEADER_RE.match(line)
    if not match:
        return None

    old_start = int(match.group(1))
    old_count = int(match.group(2)) if match.group(2) is not None else 1
    new_start = int(match.group(3))
    new_count = int(match.group(4)) if match.group(4) is not None else 1
    return old_start, old_count, new_start, new_count


class _HunkBuilder:
    """Accumulates the lines of one hunk while tracking post-image positions."""

    def __init__(self, header: str, ranges: tuple[int, int, int, int]):
        old_start, old_count, new_start, new_count = ranges
        self.hunk = Hunk(
            old_start=old_start,
            old_count=old_count,
            new_start=new_start,
            new_count=new_count,
            lines=[header],
        )
        # Post-image number of the next context or added line
        self._next_new_line = new_start

    def add(self, line: str) -> None:
        self.hunk.lines.append(line)
        marker = line[:1]
        if marker == "-":
            self.hunk.deleted_lines.append(DeletedLine(content=line[1:], raw=line))
        elif marker == "+":
            self.hunk.added_line_numbers.append(self._next_new_line)
            self._next_new_line += 1
        elif marker == " ":
            self._next_new_line += 1


def parse_diff(diff: Union[str, list[str]]) -> ParsedDiff:
    """Parse the unified diff of a single file.

    Lines before the first hunk header become the header; every following
    line belongs to the most recent hunk. Input without hunks, or with a
    malformed hunk header, yields an empty ParsedDiff instead of raising.

    Args:
        diff: Raw output of `git diff [--cached] -- <path>`, as text or lines.

    Returns:
        ParsedDiff with header lines and hunks.
    """
    if isinstance(diff, str):
        lines = diff.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
    else:
        lines = list(diff)

    if not lines:
        return ParsedDiff()

    header: list[str] = []
    hunks: list[Hunk] = []
    current: Optional[_HunkBuilder] = None

    for line in lines:
        if line.startswith("@@"):
            ranges = parse_hunk_header(line)
            if ranges is None:
                logger.warning("Malformed hunk header, showing no hunks: %r", line)
                return ParsedDiff()
            if current is not None:
                hunks.append(current.hunk)
            current = _HunkBuilder(line, ranges)
        elif current is None:
            header.append(line)
        else:
            current.add(line)

    if current is not None:
        hunks.append(current.hunk)

    if not hunks:
        return ParsedDiff()

    return ParsedDiff(header=header, hunks=hunks)


def find_hunk_at_line(
    hunks: list[Hunk], line_num: int
) -> tuple[Optional[int], Optional[Hunk]]:
    """Find the hunk whose post-image range contains a line.

    Args:
        hunks: Hunks of one file, in diff order.
        line_num: 1-indexed line number in the post-image file.

    Returns:
        Tuple of (index, hunk), or (None, None) for unchanged regions.
    """
    for index, hunk in enumerate(hunks):
        if hunk.contains_line(line_num):
            return index, hunk
    return None, None

"""Patch builder for the easydiff diff module.

Contains:
- build_hunk_patch: Build patch text for a single hunk
- build_patch: Build patch text for a hunk of a ParsedDiff by index
"""

from easydiff.diff.models import ParsedDiff


def build_hunk_patch(diff_header: list[str], hunk_lines: list[str]) -> str:
    """Build a patch containing one hunk.

    The header lines must be the original preamble of the file's diff:
    git apply validates the ---/+++ markers.

    Args:
        diff_header: The diff --git / index / --- / +++ lines.
        hunk_lines: The hunk lines, starting with its @@ header.

    Returns:
        Patch content as string
    """
    patch_lines = list(diff_header) + list(hunk_lines)
    # git apply requires the patch to end with a newline
    return "\n".join(patch_lines) + "\n"


def build_patch(parsed: ParsedDiff, hunk_index: int) -> str:
    """Build the patch for one hunk of a parsed diff.

    Raises:
        IndexError: If the diff has no hunk at that index.
    """
    hunk = parsed.hunks[hunk_index]
    return build_hunk_patch(parsed.header, hunk.lines)

"""Highlight groups and status styling for easydiff views.

Contains:
- Highlight group name constants
- HighlightSpec: Colors and attributes of one highlight group
- STATUS_STYLES: Explicit FileStatus to highlight group mapping
- status_style: Look up the highlight group of a FileStatus
- build_highlight_groups: Build all highlight groups from configured colors
"""

from dataclasses import dataclass
from typing import Optional

from easydiff.config import ColorConfig
from easydiff.diff.models import FileStatus


ADD = "EasyDiffAdd"
DELETE = "EasyDiffDelete"
ADD_TEXT = "EasyDiffAddText"
DELETE_TEXT = "EasyDiffDeleteText"
STAGED = "EasyDiffStaged"
UNSTAGED = "EasyDiffUnstaged"
UNTRACKED = "EasyDiffUntracked"
MODIFIED = "EasyDiffModified"
ADDED = "EasyDiffAdded"
DELETED = "EasyDiffDeleted"
RENAMED = "EasyDiffRenamed"


@dataclass(frozen=True)
class HighlightSpec:
    """Colors (hex strings) and attributes of a highlight group."""

    fg: Optional[str] = None
    bg: Optional[str] = None
    bold: bool = False


# Every FileStatus member must have an entry here
STATUS_STYLES: dict[FileStatus, str] = {
    FileStatus.UNTRACKED: UNTRACKED,
    FileStatus.MODIFIED: MODIFIED,
    FileStatus.ADDED: ADDED,
    FileStatus.DELETED: DELETED,
    FileStatus.RENAMED: RENAMED,
    FileStatus.COPIED: MODIFIED,
    FileStatus.UNMERGED: MODIFIED,
}


def status_style(status: FileStatus) -> str:
    """Return the highlight group used for a status letter."""
    return STATUS_STYLES[status]


def build_highlight_groups(colors: ColorConfig) -> dict[str, HighlightSpec]:
    """Build the highlight groups from the configured colors.

    Args:
        colors: The color section of the configuration.

    Returns:
        Mapping of highlight group name to its spec.
    """
    return {
        ADD: HighlightSpec(bg=colors.add_line_bg),
        DELETE: HighlightSpec(fg=colors.delete_fg, bg=colors.delete_bg),
        ADD_TEXT: HighlightSpec(fg=colors.add_fg, bg=colors.add_bg),
        DELETE_TEXT: HighlightSpec(fg=colors.delete_fg, bg=colors.delete_bg),
        STAGED: HighlightSpec(fg="#98c379", bold=True),
        UNSTAGED: HighlightSpec(fg="#e5c07b", bold=True),
        UNTRACKED: HighlightSpec(fg="#61afef"),
        MODIFIED: HighlightSpec(fg="#e5c07b"),
        ADDED: HighlightSpec(fg="#98c379"),
        DELETED: HighlightSpec(fg="#e06c75"),
        RENAMED: HighlightSpec(fg="#c678dd"),
    }

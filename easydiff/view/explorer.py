"""Explorer panel model.

Lays out the staged and unstaged sections of the side panel and maps panel
lines back to file entries.
"""

from dataclasses import dataclass, field
from typing import Optional

from easydiff.diff.models import FileEntry, StatusResult
from easydiff.view import styles
from easydiff.view.host import Decoration, DecorationKind

EXPLORER_NAMESPACE = "easydiff_explorer"

STAGED_TITLE = "━━ Staged Changes ━━━━━━━━━━━━"
UNSTAGED_TITLE = "━━ Unstaged Changes ━━━━━━━━━━"


@dataclass(frozen=True)
class ExplorerItem:
    """A file entry shown on a panel line."""

    entry: FileEntry
    line: int  # 1-indexed panel line

    @property
    def path(self) -> str:
        return self.entry.path

    @property
    def is_staged(self) -> bool:
        return self.entry.staged


@dataclass
class ExplorerModel:
    """Panel lines, the files on them, and their highlights."""

    lines: list[str] = field(default_factory=list)
    items: list[ExplorerItem] = field(default_factory=list)
    highlights: list[Decoration] = field(default_factory=list)

    @property
    def has_files(self) -> bool:
        return bool(self.items)

    def first_file(self) -> Optional[ExplorerItem]:
        return self.items[0] if self.items else None

    def file_at_line(self, line: int) -> Optional[ExplorerItem]:
        for item in self.items:
            if item.line == line:
                return item
        return None

    def find_file_index(self, path: str, is_staged: bool) -> Optional[int]:
        """Index of a file in display order, matched by path and section."""
        for index, item in enumerate(self.items):
            if item.path == path and item.is_staged == is_staged:
                return index
        return None

    def find_entry(self, path: str, is_staged: bool) -> Optional[FileEntry]:
        index = self.find_file_index(path, is_staged)
        return self.items[index].entry if index is not None else None

    def next_file_line(self, current_line: int) -> Optional[int]:
        """Panel line of the first file below the cursor."""
        for item in self.items:
            if item.line > current_line:
                return item.line
        return None

    def prev_file_line(self, current_line: int) -> Optional[int]:
        """Panel line of the last file above the cursor."""
        for item in reversed(self.items):
            if item.line < current_line:
                return item.line
        return None


def _add_section(
    model: ExplorerModel, title: str, entries: list[FileEntry], section_style: str
) -> None:
    model.lines.append(title)
    model.highlights.append(
        Decoration(kind=DecorationKind.SPAN, line=len(model.lines), style=section_style)
    )
    for entry in entries:
        model.lines.append(f"  {entry.status.code}  {entry.path}")
        line = len(model.lines)
        model.items.append(ExplorerItem(entry=entry, line=line))
        model.highlights.append(
            Decoration(
                kind=DecorationKind.SPAN,
                line=line,
                style=styles.status_style(entry.status),
                start_col=2,
                end_col=3,
            )
        )


def build_explorer(status: StatusResult) -> ExplorerModel:
    """Lay out the explorer panel for a status read.

    Args:
        status: The classified git status.

    Returns:
        ExplorerModel with staged files listed before unstaged ones.
    """
    model = ExplorerModel(lines=[""])

    if status.staged:
        _add_section(model, STAGED_TITLE, status.staged, styles.STAGED)
        model.lines.append("")

    if status.unstaged:
        _add_section(model, UNSTAGED_TITLE, status.unstaged, styles.UNSTAGED)

    if status.is_clean:
        model.lines.extend(["", "  No changes", "", "  Working tree clean"])

    return model

"""Inline diff rendering.

Contains:
- hunk_decorations: Decorations for one hunk in post-image coordinates
- whole_file_decorations: Mark every line of a buffer as added or deleted
- DiffRenderer: Clear-then-draw painter for a diff buffer
"""

import logging

from easydiff.config import EasyDiffConfig, SignConfig
from easydiff.diff.models import Hunk, ParsedDiff
from easydiff.view import styles
from easydiff.view.host import Decoration, DecorationKind, EditorHost

logger = logging.getLogger(__name__)

DIFF_NAMESPACE = "easydiff_diff"


def _deleted_block(anchor_line: int, deleted: list[str]) -> Decoration:
    return Decoration(
        kind=DecorationKind.DELETED_BLOCK,
        line=anchor_line,
        style=styles.DELETE,
        virtual_lines=tuple(f"- {content}" for content in deleted),
    )


def hunk_decorations(hunk: Hunk, signs: SignConfig) -> list[Decoration]:
    """Compute the decorations of a hunk.

    Added lines are highlighted in place. Runs of deleted lines become one
    block of virtual lines shown above the post-image line that follows
    them. A zero-count hunk names the line before the change in `new_start`,
    so its block goes above `new_start + 1`.

    Args:
        hunk: The hunk to draw.
        signs: Gutter sign characters.

    Returns:
        Decorations in buffer order.
    """
    decorations: list[Decoration] = []
    new_line = hunk.new_start + 1 if hunk.new_count == 0 else hunk.new_start
    deleted_batch: list[str] = []

    for line in hunk.body:
        marker = line[:1]
        if marker == "-":
            deleted_batch.append(line[1:])
        elif marker == "+":
            if deleted_batch:
                decorations.append(_deleted_block(new_line, deleted_batch))
                deleted_batch = []
            decorations.append(
                Decoration(
                    kind=DecorationKind.ADDED_LINE,
                    line=new_line,
                    style=styles.ADD,
                    sign=signs.add,
                )
            )
            new_line += 1
        elif marker == " ":
            if deleted_batch:
                decorations.append(_deleted_block(new_line, deleted_batch))
                deleted_batch = []
            new_line += 1

    if deleted_batch:
        decorations.append(_deleted_block(new_line, deleted_batch))

    return decorations


def whole_file_decorations(
    line_count: int, signs: SignConfig, added: bool = True
) -> list[Decoration]:
    """Mark every line of a buffer as added (untracked) or deleted."""
    if added:
        kind, style, sign = DecorationKind.ADDED_LINE, styles.ADD, signs.add
    else:
        kind, style, sign = DecorationKind.DELETED_LINE, styles.DELETE, signs.delete
    return [
        Decoration(kind=kind, line=line, style=style, sign=sign)
        for line in range(1, line_count + 1)
    ]


class DiffRenderer:
    """Paints parsed diffs onto host buffers.

    Every render clears the buffer's previous decorations first, so calling
    it repeatedly with the same input gives the same result.
    """

    def __init__(self, host: EditorHost, config: EasyDiffConfig):
        self.host = host
        self.config = config

    def clear(self, buf: int) -> None:
        self.host.clear_decorations(buf, DIFF_NAMESPACE)

    def _place(self, buf: int, decorations: list[Decoration]) -> None:
        line_count = self.host.line_count(buf)
        for decoration in decorations:
            if decoration.kind == DecorationKind.DELETED_BLOCK:
                anchor = min(max(decoration.line, 1), line_count + 1)
                if anchor != decoration.line:
                    decoration = Decoration(
                        kind=decoration.kind,
                        line=anchor,
                        style=decoration.style,
                        virtual_lines=decoration.virtual_lines,
                    )
            elif not 1 <= decoration.line <= line_count:
                logger.debug("Skipping decoration outside buffer: line %d", decoration.line)
                continue
            self.host.add_decoration(buf, DIFF_NAMESPACE, decoration)

    def render(self, buf: int, parsed: ParsedDiff) -> None:
        """Draw all hunks of a parsed diff onto a buffer."""
        self.clear(buf)
        for hunk in parsed.hunks:
            self._place(buf, hunk_decorations(hunk, self.config.signs))

    def render_untracked(self, buf: int) -> None:
        """Highlight an untracked file as entirely added."""
        self.clear(buf)
        self._place(
            buf, whole_file_decorations(self.host.line_count(buf), self.config.signs)
        )

    def render_deleted(self, buf: int) -> None:
        """Highlight a buffer holding a deleted file's old content."""
        self.clear(buf)
        self._place(
            buf,
            whole_file_decorations(
                self.host.line_count(buf), self.config.signs, added=False
            ),
        )

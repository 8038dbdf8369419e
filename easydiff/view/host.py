"""Editor host protocol used by the easydiff views.

The views never talk to a concrete editor. They need a host that can:
- create scratch (non-file-backed) buffers and open files into windows
- replace and read buffer lines
- place line, span and virtual-line decorations with a highlight group
- read and set the cursor line of a window
- register key callbacks scoped to a buffer
- show notifications

Buffers and windows are opaque integer handles. Line numbers are 1-indexed
everywhere in this interface.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol


class DecorationKind(Enum):
    """Kinds of decorations a host must be able to draw."""

    ADDED_LINE = "added_line"  # Whole line highlighted as added, with sign
    DELETED_LINE = "deleted_line"  # Whole line highlighted as deleted, with sign
    DELETED_BLOCK = "deleted_block"  # Virtual lines shown above `line`
    SPAN = "span"  # Highlight of columns [start_col, end_col) of `line`


@dataclass(frozen=True)
class Decoration:
    """A decoration anchored to a buffer line.

    For DELETED_BLOCK, `line` may be one past the last buffer line, meaning
    the block is drawn after the end of the buffer.
    """

    kind: DecorationKind
    line: int
    style: str
    sign: Optional[str] = None
    virtual_lines: tuple[str, ...] = field(default_factory=tuple)
    start_col: int = 0
    end_col: Optional[int] = None  # None means end of line


KeyCallback = Callable[[], None]


class EditorHost(Protocol):
    """Capabilities easydiff needs from the editor it is embedded in."""

    def create_layout(self, explorer_width: int) -> tuple[int, int]:
        """Create the explorer/diff split. Returns (explorer_win, diff_win)."""
        ...

    def close_layout(self) -> None:
        ...

    def create_scratch_buffer(self, name: str) -> int:
        ...

    def open_file(self, win: int, path: Path) -> int:
        """Open a file into a window and return its buffer."""
        ...

    def show_buffer(self, win: int, buf: int) -> None:
        ...

    def set_lines(self, buf: int, lines: list[str]) -> None:
        ...

    def get_lines(self, buf: int) -> list[str]:
        ...

    def line_count(self, buf: int) -> int:
        ...

    def clear_decorations(self, buf: int, namespace: str) -> None:
        ...

    def add_decoration(self, buf: int, namespace: str, decoration: Decoration) -> None:
        ...

    def get_cursor(self, win: int) -> int:
        ...

    def set_cursor(self, win: int, line: int) -> None:
        ...

    def focus(self, win: int) -> None:
        ...

    def set_keymap(self, buf: int, key: str, callback: KeyCallback, desc: str = "") -> None:
        ...

    def notify(self, message: str, level: int) -> None:
        """Show a message; `level` is a `logging` level."""
        ...

"""In-memory editor host that renders to a terminal.

TerminalHost keeps buffers, windows, decorations and key bindings in memory,
so a DiffSession can run without an editor. Views are turned into text with
render_buffer(); key presses are dispatched with press().
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import typer

from easydiff.config import EasyDiffConfig
from easydiff.view import styles
from easydiff.view.host import Decoration, DecorationKind, KeyCallback

# Friendlier spellings accepted at an interactive prompt
KEY_ALIASES = {
    "": "<CR>",
    "enter": "<CR>",
    "tab": "<Tab>",
    "n": "<Tab>",
    "stab": "<S-Tab>",
    "p": "<S-Tab>",
}


@dataclass
class _Buffer:
    name: str
    lines: list[str] = field(default_factory=list)
    path: Optional[Path] = None
    decorations: dict[str, list[Decoration]] = field(default_factory=dict)
    keymaps: dict[str, tuple[KeyCallback, str]] = field(default_factory=dict)


@dataclass
class _Window:
    buf: Optional[int] = None
    cursor: int = 1


def _hex_to_rgb(value: Optional[str]) -> Optional[tuple[int, int, int]]:
    if not value or not value.startswith("#") or len(value) != 7:
        return None
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)


class TerminalHost:
    """EditorHost implementation backed by plain Python objects."""

    def __init__(
        self,
        config: Optional[EasyDiffConfig] = None,
        color: bool = True,
        echo: bool = True,
    ):
        self.config = config or EasyDiffConfig()
        self.color = color
        self.echo = echo
        self.highlights = styles.build_highlight_groups(self.config.colors)
        self.buffers: dict[int, _Buffer] = {}
        self.windows: dict[int, _Window] = {}
        self.current_win: Optional[int] = None
        self.messages: list[tuple[int, str]] = []
        self.explorer_width = self.config.explorer_width
        self._next_handle = 1

    def _new_handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    # ------------------------------------------------------------------
    # EditorHost protocol
    # ------------------------------------------------------------------

    def create_layout(self, explorer_width: int) -> tuple[int, int]:
        self.explorer_width = explorer_width
        explorer_win = self._new_handle()
        diff_win = self._new_handle()
        self.windows[explorer_win] = _Window()
        self.windows[diff_win] = _Window()
        self.current_win = explorer_win
        return explorer_win, diff_win

    def close_layout(self) -> None:
        self.windows.clear()
        self.buffers.clear()
        self.current_win = None

    def create_scratch_buffer(self, name: str) -> int:
        buf = self._new_handle()
        self.buffers[buf] = _Buffer(name=name)
        return buf

    def open_file(self, win: int, path: Path) -> int:
        for buf, buffer in self.buffers.items():
            if buffer.path == path:
                buffer.lines = self._read_lines(path)
                self.show_buffer(win, buf)
                return buf
        buf = self._new_handle()
        self.buffers[buf] = _Buffer(name=str(path), lines=self._read_lines(path), path=path)
        self.show_buffer(win, buf)
        return buf

    @staticmethod
    def _read_lines(path: Path) -> list[str]:
        text = path.read_text(encoding="utf-8", errors="replace")
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def show_buffer(self, win: int, buf: int) -> None:
        window = self.windows[win]
        window.buf = buf
        window.cursor = 1

    def set_lines(self, buf: int, lines: list[str]) -> None:
        self.buffers[buf].lines = list(lines)

    def get_lines(self, buf: int) -> list[str]:
        return list(self.buffers[buf].lines)

    def line_count(self, buf: int) -> int:
        return len(self.buffers[buf].lines)

    def clear_decorations(self, buf: int, namespace: str) -> None:
        self.buffers[buf].decorations.pop(namespace, None)

    def add_decoration(self, buf: int, namespace: str, decoration: Decoration) -> None:
        self.buffers[buf].decorations.setdefault(namespace, []).append(decoration)

    def get_cursor(self, win: int) -> int:
        return self.windows[win].cursor

    def set_cursor(self, win: int, line: int) -> None:
        window = self.windows[win]
        count = self.line_count(window.buf) if window.buf is not None else 0
        window.cursor = min(max(line, 1), max(count, 1))

    def focus(self, win: int) -> None:
        if win in self.windows:
            self.current_win = win

    def set_keymap(self, buf: int, key: str, callback: KeyCallback, desc: str = "") -> None:
        self.buffers[buf].keymaps[key] = (callback, desc)

    def notify(self, message: str, level: int) -> None:
        self.messages.append((level, message))
        if self.echo:
            typer.echo(message, err=level >= logging.WARNING)

    # ------------------------------------------------------------------
    # Terminal helpers
    # ------------------------------------------------------------------

    def current_buffer(self) -> Optional[int]:
        if self.current_win is None:
            return None
        return self.windows[self.current_win].buf

    def decorations(self, buf: int) -> list[Decoration]:
        """All decorations of a buffer, across namespaces."""
        result: list[Decoration] = []
        for decorations in self.buffers[buf].decorations.values():
            result.extend(decorations)
        return result

    def keymap_help(self, buf: int) -> list[tuple[str, str]]:
        return [(key, desc) for key, (_, desc) in self.buffers[buf].keymaps.items()]

    def press(self, key: str) -> bool:
        """Dispatch a key to the focused buffer's bindings.

        Returns:
            True if a binding handled the key.
        """
        buf = self.current_buffer()
        if buf is None:
            return False
        keymaps = self.buffers[buf].keymaps
        if key not in keymaps:
            key = KEY_ALIASES.get(key.strip().lower(), key)
        binding = keymaps.get(key)
        if binding is None:
            return False
        callback, _ = binding
        callback()
        return True

    def _style(self, text: str, style_name: str) -> str:
        if not self.color:
            return text
        spec = self.highlights.get(style_name)
        if spec is None:
            return text
        return typer.style(
            text,
            fg=_hex_to_rgb(spec.fg),
            bg=_hex_to_rgb(spec.bg),
            bold=spec.bold or None,
        )

    def render_buffer(
        self, buf: int, numbers: bool = True, cursor: Optional[int] = None
    ) -> list[str]:
        """Render a buffer and its decorations as terminal lines.

        Args:
            buf: The buffer to render.
            numbers: Show line numbers in the gutter.
            cursor: Mark this line with ">" in the gutter.
        """
        lines = self.buffers[buf].lines
        decorations = self.decorations(buf)
        width = len(str(max(len(lines), 1)))

        blocks: dict[int, list[Decoration]] = {}
        line_marks: dict[int, Decoration] = {}
        spans: dict[int, list[Decoration]] = {}
        for decoration in decorations:
            if decoration.kind == DecorationKind.DELETED_BLOCK:
                blocks.setdefault(decoration.line, []).append(decoration)
            elif decoration.kind == DecorationKind.SPAN:
                spans.setdefault(decoration.line, []).append(decoration)
            else:
                line_marks[decoration.line] = decoration

        def gutter(sign: str, number: Optional[int]) -> str:
            prefix = ""
            if cursor is not None:
                prefix = "> " if number is not None and number == cursor else "  "
            if not numbers:
                return f"{prefix}{sign} "
            label = str(number) if number is not None else ""
            return f"{prefix}{label:>{width}} {sign} "

        def virtual(line_num: int) -> list[str]:
            rendered = []
            for block in blocks.get(line_num, []):
                for text in block.virtual_lines:
                    rendered.append(gutter(" ", None) + self._style(text, block.style))
            return rendered

        output: list[str] = []
        for line_num, text in enumerate(lines, start=1):
            output.extend(virtual(line_num))
            mark = line_marks.get(line_num)
            if mark is not None:
                if mark.kind == DecorationKind.ADDED_LINE:
                    sign_style = styles.ADD_TEXT
                else:
                    sign_style = styles.DELETE_TEXT
                sign = self._style(mark.sign or " ", sign_style)
                output.append(gutter(sign, line_num) + self._style(text, mark.style))
                continue
            for span in sorted(spans.get(line_num, []), key=lambda s: s.start_col, reverse=True):
                end = len(text) if span.end_col is None else span.end_col
                text = (
                    text[:span.start_col]
                    + self._style(text[span.start_col:end], span.style)
                    + text[end:]
                )
            output.append(gutter(" ", line_num) + text)
        output.extend(virtual(len(lines) + 1))
        return output

    def render_window(
        self, win: int, numbers: bool = True, show_cursor: bool = False
    ) -> list[str]:
        window = self.windows[win]
        if window.buf is None:
            return []
        cursor = window.cursor if show_cursor else None
        return self.render_buffer(window.buf, numbers=numbers, cursor=cursor)

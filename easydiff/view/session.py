"""Diff viewer session.

A DiffSession owns everything one open viewer needs: the host windows and
buffers, the explorer model, the file currently shown and its parsed diff.
It is created by whoever opens the viewer and torn down with close().

Panel states:
    CLOSED -> OPEN_EMPTY -> OPEN_UNSTAGED <-> OPEN_STAGED -> CLOSED

The unstaged/staged view follows the explorer section the selected file came
from; it is never toggled on its own.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from easydiff.config import EasyDiffConfig
from easydiff.diff.models import FileEntry, FileStatus, Hunk, ParsedDiff
from easydiff.diff.parser import find_hunk_at_line, parse_diff
from easydiff.git import (
    GitError,
    get_file_diff,
    get_repo_root,
    get_status,
    show_head,
    show_staged,
    stage_file,
    stage_hunk,
    unstage_file,
    unstage_hunk,
)
from easydiff.view.explorer import (
    EXPLORER_NAMESPACE,
    ExplorerModel,
    build_explorer,
)
from easydiff.view.host import EditorHost
from easydiff.view.render import DiffRenderer

logger = logging.getLogger(__name__)

NOTIFY_PREFIX = "EasyDiff: "


class PanelState(Enum):
    """States of the viewer panel."""

    CLOSED = "closed"
    OPEN_EMPTY = "open_empty"  # Open, no file selected
    OPEN_UNSTAGED = "open_unstaged"
    OPEN_STAGED = "open_staged"


class DiffSession:
    """An open (or openable) diff viewer bound to one editor host."""

    def __init__(
        self,
        host: EditorHost,
        config: Optional[EasyDiffConfig] = None,
        cwd: Optional[Path] = None,
    ):
        self.host = host
        self.config = config or EasyDiffConfig()
        self.cwd = cwd
        self.renderer = DiffRenderer(host, self.config)
        self._reset()

    def _reset(self) -> None:
        self.state = PanelState.CLOSED
        self.repo_root: Optional[Path] = None
        self.explorer_win: Optional[int] = None
        self.diff_win: Optional[int] = None
        self.explorer_buf: Optional[int] = None
        self.diff_buf: Optional[int] = None
        self.explorer = ExplorerModel()
        self.current_path: Optional[str] = None
        self.is_staged_view = False
        self.parsed_diff: Optional[ParsedDiff] = None
        self._scratch_buffers: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _notify(self, message: str, level: int = logging.INFO) -> None:
        logger.log(level, message)
        self.host.notify(NOTIFY_PREFIX + message, level)

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.state != PanelState.CLOSED

    def open(self, auto_select: bool = True) -> bool:
        """Open the viewer.

        Args:
            auto_select: Show the first changed file right away.

        Returns:
            True if the viewer is open afterwards.
        """
        try:
            repo_root = get_repo_root(self.cwd)
        except GitError:
            self._notify("Not in a git repository", logging.ERROR)
            return False

        if self.is_open:
            self.host.focus(self.explorer_win)
            return True

        self.repo_root = repo_root
        self.explorer_win, self.diff_win = self.host.create_layout(
            self.config.explorer_width
        )

        self.diff_buf = self._scratch_buffer("EasyDiff://Diff")
        self.host.show_buffer(self.diff_win, self.diff_buf)
        self._setup_diff_keymaps(self.diff_buf)
        self.explorer_buf = self._scratch_buffer("EasyDiff://Explorer")
        self.host.show_buffer(self.explorer_win, self.explorer_buf)
        self.state = PanelState.OPEN_EMPTY
        self._setup_explorer_keymaps()
        self.host.focus(self.explorer_win)

        try:
            has_files = self.render_explorer()
        except GitError as e:
            self._notify(f"Failed to read status - {e}", logging.ERROR)
            self.close()
            return False

        logger.debug("Session opened at %s", self.repo_root)
        if auto_select and has_files:
            self.open_first_file()
        return True

    def _scratch_buffer(self, name: str) -> int:
        """Return the session's scratch buffer with this name, creating it once."""
        buf = self._scratch_buffers.get(name)
        if buf is None:
            buf = self.host.create_scratch_buffer(name)
            self._scratch_buffers[name] = buf
        return buf

    def close(self) -> None:
        """Close the viewer and drop all session state."""
        if not self.is_open:
            return
        self.host.close_layout()
        self._reset()
        logger.debug("Session closed")

    def toggle(self) -> bool:
        if self.is_open:
            self.close()
            return False
        return self.open()

    # ------------------------------------------------------------------
    # Explorer
    # ------------------------------------------------------------------

    def render_explorer(self) -> bool:
        """Re-read status and redraw the explorer panel.

        Returns:
            True if there are changed files.

        Raises:
            GitError: If git status fails.
        """
        status = get_status(self.repo_root)
        self.explorer = build_explorer(status)

        self.host.set_lines(self.explorer_buf, self.explorer.lines)
        self.host.clear_decorations(self.explorer_buf, EXPLORER_NAMESPACE)
        for highlight in self.explorer.highlights:
            self.host.add_decoration(self.explorer_buf, EXPLORER_NAMESPACE, highlight)

        first = self.explorer.first_file()
        if first is not None:
            self.host.set_cursor(self.explorer_win, first.line)
        return self.explorer.has_files

    def open_first_file(self) -> bool:
        first = self.explorer.first_file()
        if first is None:
            return False
        return self.select_file(first.path, first.is_staged)

    def open_selected(self) -> bool:
        """Show the file under the explorer cursor."""
        if not self.is_open:
            return False
        item = self.explorer.file_at_line(self.host.get_cursor(self.explorer_win))
        if item is None:
            return False
        return self.select_file(item.path, item.is_staged)

    def move_to_file(self, index: int) -> bool:
        if index < 0 or index >= len(self.explorer.items):
            return False
        self.host.set_cursor(self.explorer_win, self.explorer.items[index].line)
        return True

    def _explorer_item_at_cursor(self):
        return self.explorer.file_at_line(self.host.get_cursor(self.explorer_win))

    def _cursor_to_next_file(self) -> None:
        line = self.explorer.next_file_line(self.host.get_cursor(self.explorer_win))
        if line is not None:
            self.host.set_cursor(self.explorer_win, line)

    def _cursor_to_prev_file(self) -> None:
        line = self.explorer.prev_file_line(self.host.get_cursor(self.explorer_win))
        if line is not None:
            self.host.set_cursor(self.explorer_win, line)

    # ------------------------------------------------------------------
    # Diff view
    # ------------------------------------------------------------------

    def select_file(self, path: str, staged: bool, focus: bool = True) -> bool:
        """Show a file's diff in the diff window.

        Args:
            path: Path relative to the repository root.
            staged: Show the staged (index vs HEAD) diff instead of the
                unstaged (worktree vs index) one.
            focus: Move focus to the diff window.

        Returns:
            True if the file was shown.
        """
        if not self.is_open:
            return False

        entry = self.explorer.find_entry(path, staged)
        try:
            if staged:
                self._show_staged(path, entry)
            else:
                self._show_unstaged(path, entry)
        except GitError as e:
            self._notify(f"Could not show {path} - {e}", logging.ERROR)
            return False

        self.current_path = path
        self.is_staged_view = staged
        self.state = PanelState.OPEN_STAGED if staged else PanelState.OPEN_UNSTAGED
        self._setup_diff_keymaps(self.diff_buf)
        if focus:
            self.host.focus(self.diff_win)
        return True

    def _show_unstaged(self, path: str, entry: Optional[FileEntry]) -> None:
        full_path = self.repo_root / path
        if not full_path.is_file():
            # Deleted in the worktree: show what the index (or HEAD) had
            try:
                old_content = show_staged(path, self.repo_root)
            except GitError:
                old_content = show_head(path, self.repo_root)
            self._show_deleted(path, old_content)
            return

        diff_lines = get_file_diff(path, staged=False, repo_root=self.repo_root)
        buf = self.host.open_file(self.diff_win, full_path)
        self.diff_buf = buf

        if not diff_lines:
            self.parsed_diff = ParsedDiff()
            if entry is not None and entry.status == FileStatus.UNTRACKED:
                self.renderer.render_untracked(buf)
            else:
                self.renderer.clear(buf)
            return

        self.parsed_diff = parse_diff(diff_lines)
        self.renderer.render(buf, self.parsed_diff)

    def _show_staged(self, path: str, entry: Optional[FileEntry]) -> None:
        if entry is not None and entry.status == FileStatus.DELETED:
            self._show_deleted(path, show_head(path, self.repo_root))
            return

        diff_lines = get_file_diff(path, staged=True, repo_root=self.repo_root)
        try:
            content = show_staged(path, self.repo_root)
        except GitError:
            if diff_lines:
                self._show_deleted(path, show_head(path, self.repo_root))
            else:
                # Not in the index and nothing staged, e.g. a new file just unstaged
                self._show_empty(f"EasyDiff://:{path}")
            return

        # The staged diff's post-image is the index content, not the worktree file
        buf = self._scratch_buffer(f"EasyDiff://:{path}")
        self.host.set_lines(buf, content)
        self.host.show_buffer(self.diff_win, buf)
        self.diff_buf = buf

        self.parsed_diff = parse_diff(diff_lines)
        self.renderer.render(buf, self.parsed_diff)

    def _show_empty(self, name: str) -> None:
        buf = self._scratch_buffer(name)
        self.host.set_lines(buf, [])
        self.host.show_buffer(self.diff_win, buf)
        self.diff_buf = buf
        self.parsed_diff = ParsedDiff()
        self.renderer.clear(buf)

    def _show_deleted(self, path: str, old_content: list[str]) -> None:
        buf = self._scratch_buffer(f"EasyDiff://deleted/{path}")
        self.host.set_lines(buf, old_content)
        self.host.show_buffer(self.diff_win, buf)
        self.diff_buf = buf
        self.parsed_diff = ParsedDiff()
        self.renderer.render_deleted(buf)

    def hunk_at_cursor(self) -> tuple[Optional[int], Optional[Hunk]]:
        """Find the hunk under the diff window cursor."""
        if not self.is_open or self.parsed_diff is None:
            return None, None
        line = self.host.get_cursor(self.diff_win)
        return find_hunk_at_line(self.parsed_diff.hunks, line)

    def focus_explorer(self) -> None:
        if self.explorer_win is not None:
            self.host.focus(self.explorer_win)

    def focus_diff(self) -> None:
        if self.diff_win is not None:
            self.host.focus(self.diff_win)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _current_index(self) -> Optional[int]:
        if self.current_path is None:
            return None
        return self.explorer.find_file_index(self.current_path, self.is_staged_view)

    def next_file(self) -> bool:
        """Show the next changed file, wrapping around at the end."""
        items = self.explorer.items
        if not items:
            return False
        current = self._current_index()
        next_index = 0 if current is None else (current + 1) % len(items)
        item = items[next_index]
        if self.select_file(item.path, item.is_staged):
            self.move_to_file(next_index)
            return True
        return False

    def prev_file(self) -> bool:
        """Show the previous changed file, wrapping around at the start."""
        items = self.explorer.items
        if not items:
            return False
        current = self._current_index()
        prev_index = len(items) - 1 if current is None else (current - 1) % len(items)
        item = items[prev_index]
        if self.select_file(item.path, item.is_staged):
            self.move_to_file(prev_index)
            return True
        return False

    # ------------------------------------------------------------------
    # Stage / unstage
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Re-read status and redraw the explorer and the current diff."""
        if not self.is_open:
            return
        try:
            self.render_explorer()
        except GitError as e:
            self._notify(f"Failed to read status - {e}", logging.ERROR)
            return
        if self.current_path is not None:
            if self.select_file(self.current_path, self.is_staged_view, focus=False):
                index = self._current_index()
                if index is not None:
                    self.move_to_file(index)

    def _after_mutation(self) -> None:
        if self.config.auto_refresh:
            self.refresh()

    def stage_hunk(self) -> bool:
        """Stage the hunk under the cursor of the unstaged view."""
        if self.current_path is None:
            self._notify("No file open", logging.WARNING)
            return False
        if self.is_staged_view:
            self._notify("Cannot stage from staged view (already staged)", logging.WARNING)
            return False

        _, hunk = self.hunk_at_cursor()
        if hunk is None:
            self._notify("No hunk at cursor position", logging.WARNING)
            return False

        try:
            stage_hunk(self.parsed_diff.header, hunk.lines, self.repo_root)
        except GitError as e:
            self._notify(f"Failed to stage hunk - {e}", logging.ERROR)
            return False

        self._notify("Staged hunk")
        self._after_mutation()
        return True

    def unstage_hunk(self) -> bool:
        """Unstage the hunk under the cursor of the staged view."""
        if self.current_path is None:
            self._notify("No file open", logging.WARNING)
            return False
        if not self.is_staged_view:
            self._notify("Cannot unstage from unstaged view", logging.WARNING)
            return False

        _, hunk = self.hunk_at_cursor()
        if hunk is None:
            self._notify("No hunk at cursor position", logging.WARNING)
            return False

        try:
            unstage_hunk(self.parsed_diff.header, hunk.lines, self.repo_root)
        except GitError as e:
            self._notify(f"Failed to unstage hunk - {e}", logging.ERROR)
            return False

        self._notify("Unstaged hunk")
        self._after_mutation()
        return True

    def stage_path(self, path: str) -> bool:
        """Stage a whole file."""
        try:
            stage_file(path, self.repo_root)
        except GitError as e:
            self._notify(f"Failed to stage - {e}", logging.ERROR)
            return False
        self._notify(f"Staged {path}")
        self._after_mutation()
        return True

    def unstage_path(self, path: str) -> bool:
        """Unstage a whole file."""
        try:
            unstage_file(path, self.repo_root)
        except GitError as e:
            self._notify(f"Failed to unstage - {e}", logging.ERROR)
            return False
        self._notify(f"Unstaged {path}")
        self._after_mutation()
        return True

    def stage_file(self) -> bool:
        """Stage the file shown in the diff view."""
        if self.current_path is None:
            self._notify("No file open", logging.WARNING)
            return False
        return self.stage_path(self.current_path)

    def unstage_file(self) -> bool:
        """Unstage the file shown in the diff view."""
        if self.current_path is None:
            self._notify("No file open", logging.WARNING)
            return False
        return self.unstage_path(self.current_path)

    # ------------------------------------------------------------------
    # Key bindings
    # ------------------------------------------------------------------

    def _stage_item_at_cursor(self) -> None:
        item = self._explorer_item_at_cursor()
        if item is not None and not item.is_staged:
            self.stage_path(item.path)

    def _unstage_item_at_cursor(self) -> None:
        item = self._explorer_item_at_cursor()
        if item is not None and item.is_staged:
            self.unstage_path(item.path)

    def _setup_explorer_keymaps(self) -> None:
        keymaps = self.config.keymaps
        buf = self.explorer_buf
        self.host.set_keymap(buf, keymaps.select, self.open_selected, "Open file in diff view")
        self.host.set_keymap(buf, keymaps.stage, self._stage_item_at_cursor, "Stage file")
        self.host.set_keymap(buf, keymaps.unstage, self._unstage_item_at_cursor, "Unstage file")
        self.host.set_keymap(buf, keymaps.close, self.close, "Close EasyDiff")
        self.host.set_keymap(buf, "j", self._cursor_to_next_file, "Next file")
        self.host.set_keymap(buf, "k", self._cursor_to_prev_file, "Previous file")
        self.host.set_keymap(buf, "<Tab>", self.focus_diff, "Focus diff view")

    def _setup_diff_keymaps(self, buf: int) -> None:
        keymaps = self.config.keymaps
        self.host.set_keymap(buf, keymaps.close, self.close, "Close EasyDiff")
        self.host.set_keymap(buf, keymaps.stage, self.stage_hunk, "Stage current hunk")
        self.host.set_keymap(buf, keymaps.stage_file, self.stage_file, "Stage entire file")
        self.host.set_keymap(buf, keymaps.unstage, self.unstage_hunk, "Unstage current hunk")
        self.host.set_keymap(buf, keymaps.unstage_file, self.unstage_file, "Unstage entire file")
        self.host.set_keymap(buf, keymaps.next_file, self.next_file, "Next changed file")
        self.host.set_keymap(buf, keymaps.prev_file, self.prev_file, "Previous changed file")
        self.host.set_keymap(buf, keymaps.focus_explorer, self.focus_explorer, "Focus explorer")
        self.host.set_keymap(buf, keymaps.focus_diff, self.focus_diff, "Focus diff view")

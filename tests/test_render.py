"""Tests for easydiff.view.render and easydiff.view.styles modules."""

from easydiff.config import ColorConfig, EasyDiffConfig, SignConfig
from easydiff.diff import FileStatus, parse_diff
from easydiff.view import styles
from easydiff.view.host import Decoration, DecorationKind
from easydiff.view.render import (
    DIFF_NAMESPACE,
    DiffRenderer,
    hunk_decorations,
    whole_file_decorations,
)


def _kinds(decorations):
    return [(d.kind, d.line) for d in decorations]


class TestStatusStyles:
    """Tests for the status style mapping."""

    def test_every_status_has_a_style(self):
        """Test that the mapping covers every FileStatus member."""
        for status in FileStatus:
            assert styles.status_style(status) in styles.build_highlight_groups(ColorConfig())

    def test_known_styles(self):
        """Test the style of common statuses."""
        assert styles.status_style(FileStatus.UNTRACKED) == styles.UNTRACKED
        assert styles.status_style(FileStatus.MODIFIED) == styles.MODIFIED
        assert styles.status_style(FileStatus.ADDED) == styles.ADDED
        assert styles.status_style(FileStatus.DELETED) == styles.DELETED
        assert styles.status_style(FileStatus.RENAMED) == styles.RENAMED

    def test_highlight_groups_use_configured_colors(self):
        """Test that diff highlight colors come from the config."""
        groups = styles.build_highlight_groups(ColorConfig(add_line_bg="#000001"))

        assert groups[styles.ADD].bg == "#000001"
        assert groups[styles.DELETE].fg == "#e06c75"


class TestHunkDecorations:
    """Tests for hunk_decorations function."""

    def test_replacement_then_addition(self, sample_diff):
        """Test a deleted line followed by two added lines."""
        hunk = parse_diff(sample_diff).hunks[0]

        decorations = hunk_decorations(hunk, SignConfig())

        assert _kinds(decorations) == [
            (DecorationKind.DELETED_BLOCK, 2),
            (DecorationKind.ADDED_LINE, 2),
            (DecorationKind.ADDED_LINE, 3),
        ]
        assert decorations[0].virtual_lines == ("- import sys",)
        assert decorations[0].style == styles.DELETE
        assert decorations[1].sign == "+"
        assert decorations[1].style == styles.ADD

    def test_deleted_run_is_one_block(self, sample_diff):
        """Test that consecutive deletions are grouped."""
        hunk = parse_diff(sample_diff).hunks[1]

        decorations = hunk_decorations(hunk, SignConfig())

        assert _kinds(decorations) == [
            (DecorationKind.DELETED_BLOCK, 22),
            (DecorationKind.ADDED_LINE, 22),
        ]
        assert decorations[0].virtual_lines == ("-     x = 1", "-     return x")

    def test_added_lines_match_parser(self, sample_diff):
        """Test that added-line decorations sit on the parsed added lines."""
        for hunk in parse_diff(sample_diff).hunks:
            added = [
                d.line for d in hunk_decorations(hunk, SignConfig())
                if d.kind == DecorationKind.ADDED_LINE
            ]
            assert added == hunk.added_line_numbers

    def test_deletion_before_context(self):
        """Test a deletion flushed by a following context line."""
        hunk = parse_diff(["@@ -1,3 +1,2 @@", " a", "-b", " c"]).hunks[0]

        assert _kinds(hunk_decorations(hunk, SignConfig())) == [
            (DecorationKind.DELETED_BLOCK, 2),
        ]

    def test_deletion_at_hunk_end(self):
        """Test a deletion flushed when the hunk ends."""
        hunk = parse_diff(["@@ -1,2 +1,1 @@", " a", "-b"]).hunks[0]

        assert _kinds(hunk_decorations(hunk, SignConfig())) == [
            (DecorationKind.DELETED_BLOCK, 2),
        ]

    def test_pure_deletion_goes_below_new_start(self):
        """Test that a zero-count hunk is drawn after line new_start."""
        hunk = parse_diff(["@@ -5,2 +4,0 @@", "-x", "-y"]).hunks[0]

        decorations = hunk_decorations(hunk, SignConfig())

        assert _kinds(decorations) == [(DecorationKind.DELETED_BLOCK, 5)]
        assert decorations[0].virtual_lines == ("- x", "- y")

    def test_custom_sign(self):
        """Test that the configured add sign is used."""
        hunk = parse_diff(["@@ -0,0 +1 @@", "+a"]).hunks[0]

        assert hunk_decorations(hunk, SignConfig(add="│"))[0].sign == "│"


class TestWholeFileDecorations:
    """Tests for whole_file_decorations function."""

    def test_added(self):
        """Test that every line is marked added."""
        decorations = whole_file_decorations(3, SignConfig())

        assert _kinds(decorations) == [(DecorationKind.ADDED_LINE, n) for n in (1, 2, 3)]

    def test_deleted(self):
        """Test that every line is marked deleted with the delete sign."""
        decorations = whole_file_decorations(2, SignConfig(), added=False)

        assert all(d.kind == DecorationKind.DELETED_LINE for d in decorations)
        assert all(d.sign == "-" for d in decorations)

    def test_empty_buffer(self):
        """Test that an empty buffer gets no decorations."""
        assert whole_file_decorations(0, SignConfig()) == []


class TestDiffRenderer:
    """Tests for DiffRenderer class."""

    def _buffer(self, host, count):
        buf = host.create_scratch_buffer("test")
        host.set_lines(buf, [f"line {i}" for i in range(1, count + 1)])
        return buf

    def test_render_places_decorations(self, host, sample_diff):
        """Test that all hunk decorations land in the diff namespace."""
        buf = self._buffer(host, 30)
        renderer = DiffRenderer(host, EasyDiffConfig())

        renderer.render(buf, parse_diff(sample_diff))

        assert len(host.buffers[buf].decorations[DIFF_NAMESPACE]) == 5

    def test_render_is_idempotent(self, host, sample_diff):
        """Test that rendering twice gives the same decorations."""
        buf = self._buffer(host, 30)
        renderer = DiffRenderer(host, EasyDiffConfig())

        renderer.render(buf, parse_diff(sample_diff))
        first = host.decorations(buf)
        renderer.render(buf, parse_diff(sample_diff))

        assert host.decorations(buf) == first

    def test_render_empty_diff_clears(self, host, sample_diff):
        """Test that an empty diff removes earlier decorations."""
        buf = self._buffer(host, 30)
        renderer = DiffRenderer(host, EasyDiffConfig())
        renderer.render(buf, parse_diff(sample_diff))

        renderer.render(buf, parse_diff(""))

        assert host.decorations(buf) == []

    def test_block_past_end_is_clamped(self, host):
        """Test that a block anchored beyond the buffer sits at its end."""
        buf = self._buffer(host, 2)
        renderer = DiffRenderer(host, EasyDiffConfig())

        renderer.render(buf, parse_diff(["@@ -3,1 +9,0 @@", "-gone"]))

        decorations = host.decorations(buf)
        assert _kinds(decorations) == [(DecorationKind.DELETED_BLOCK, 3)]

    def test_lines_outside_buffer_are_skipped(self, host):
        """Test that added lines past the buffer end are dropped."""
        buf = self._buffer(host, 1)
        renderer = DiffRenderer(host, EasyDiffConfig())

        renderer.render(buf, parse_diff(["@@ -0,0 +1,2 @@", "+a", "+b"]))

        assert _kinds(host.decorations(buf)) == [(DecorationKind.ADDED_LINE, 1)]

    def test_other_namespaces_untouched(self, host, sample_diff):
        """Test that clearing only affects the diff namespace."""
        buf = self._buffer(host, 30)
        other = Decoration(kind=DecorationKind.SPAN, line=1, style=styles.STAGED)
        host.add_decoration(buf, "other", other)

        DiffRenderer(host, EasyDiffConfig()).render(buf, parse_diff(""))

        assert host.decorations(buf) == [other]

    def test_render_untracked_and_deleted(self, host):
        """Test whole-buffer rendering."""
        buf = self._buffer(host, 3)
        renderer = DiffRenderer(host, EasyDiffConfig())

        renderer.render_untracked(buf)
        assert {d.kind for d in host.decorations(buf)} == {DecorationKind.ADDED_LINE}

        renderer.render_deleted(buf)
        assert {d.kind for d in host.decorations(buf)} == {DecorationKind.DELETED_LINE}
        assert len(host.decorations(buf)) == 3

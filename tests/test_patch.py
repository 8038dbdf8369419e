"""Tests for easydiff.diff.patch module."""

import pytest

from easydiff.diff import ParsedDiff, build_hunk_patch, build_patch, parse_diff


class TestBuildHunkPatch:
    """Tests for build_hunk_patch function."""

    def test_header_then_hunk(self):
        """Test that the patch is header lines followed by hunk lines."""
        patch = build_hunk_patch(
            ["--- a/f", "+++ b/f"],
            ["@@ -1 +1 @@", "-old", "+new"],
        )

        assert patch == "--- a/f\n+++ b/f\n@@ -1 +1 @@\n-old\n+new\n"

    def test_ends_with_newline(self):
        """Test that the patch always ends with a newline."""
        patch = build_hunk_patch(["--- a/f", "+++ b/f"], ["@@ -1 +1,2 @@", " a", "+b"])

        assert patch.endswith("\n")
        assert not patch.endswith("\n\n")

    def test_keeps_lines_verbatim(self):
        """Test that whitespace and carriage returns are not altered."""
        patch = build_hunk_patch(["--- a/f", "+++ b/f"], ["@@ -1 +1 @@", "-x\r", "+y  "])

        assert "-x\r\n" in patch
        assert "+y  \n" in patch

    def test_does_not_modify_inputs(self):
        """Test that the given lists are left untouched."""
        header = ["--- a/f", "+++ b/f"]
        hunk = ["@@ -1 +1 @@", "-a", "+b"]

        build_hunk_patch(header, hunk)

        assert header == ["--- a/f", "+++ b/f"]
        assert hunk == ["@@ -1 +1 @@", "-a", "+b"]


class TestBuildPatch:
    """Tests for build_patch function."""

    def test_selects_hunk_by_index(self, sample_diff):
        """Test that only the selected hunk is included."""
        parsed = parse_diff(sample_diff)

        patch = build_patch(parsed, 0)

        assert "@@ -1,5 +1,6 @@" in patch
        assert "@@ -20,4 +21,3 @@" not in patch
        assert patch.startswith("diff --git a/src/main.py b/src/main.py\n")

    def test_out_of_range(self):
        """Test that a missing hunk raises IndexError."""
        with pytest.raises(IndexError):
            build_patch(ParsedDiff(), 0)

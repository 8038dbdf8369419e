"""Shared test fixtures and configuration."""

import subprocess
import tempfile
from pathlib import Path

import pytest

from easydiff.config import EasyDiffConfig
from easydiff.view.terminal import TerminalHost


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path, monkeypatch):
    """Point the global config directory at an empty temp location."""
    monkeypatch.setattr("easydiff.config._CONFIG_DIR", tmp_path / "global_easydiff")


def _git(repo_dir: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo_dir, capture_output=True, check=True)


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository with one committed file."""
    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    _git(repo_dir, "init")
    _git(repo_dir, "config", "user.email", "test@example.com")
    _git(repo_dir, "config", "user.name", "Test User")
    _git(repo_dir, "config", "core.autocrlf", "false")

    # Create initial commit
    lines = [f"line {i}" for i in range(1, 21)]
    (repo_dir / "app.txt").write_text("\n".join(lines) + "\n")
    (repo_dir / "README.md").write_text("# Test Repo\n")
    _git(repo_dir, "add", "app.txt", "README.md")
    _git(repo_dir, "commit", "-m", "Initial commit")

    return repo_dir


@pytest.fixture
def two_hunk_repo(temp_repo):
    """Repository where app.txt has two separate unstaged hunks."""
    lines = [f"line {i}" for i in range(1, 21)]
    lines[1] = "line 2 changed"
    lines.insert(17, "inserted near the end")
    (temp_repo / "app.txt").write_text("\n".join(lines) + "\n")
    return temp_repo


@pytest.fixture
def host():
    """Terminal host that records notifications without echoing them."""
    return TerminalHost(EasyDiffConfig(), color=False, echo=False)


@pytest.fixture
def sample_diff_lines():
    """Unstaged diff of one file with two hunks, as lines."""
    return [
        "diff --git a/src/main.py b/src/main.py",
        "index 1234567..abcdefg 100644",
        "--- a/src/main.py",
        "+++ b/src/main.py",
        "@@ -1,5 +1,6 @@",
        " import os",
        "-import sys",
        "+import sys",
        "+import json",
        " ",
        " def main():",
        "     pass",
        "@@ -20,4 +21,3 @@ def helper():",
        " def helper():",
        "-    x = 1",
        "-    return x",
        "+    return 1",
        " ",
    ]


@pytest.fixture
def sample_diff(sample_diff_lines):
    """Unstaged diff of one file with two hunks, as git prints it."""
    return "\n".join(sample_diff_lines) + "\n"


@pytest.fixture
def sample_status_output():
    """Porcelain v1 status covering every column combination."""
    return (
        "M  staged.py\n"
        " M unstaged.py\n"
        "MM both.py\n"
        "A  added.py\n"
        " D removed.py\n"
        "R  old.txt -> new.txt\n"
        "?? new.txt\n"
    )

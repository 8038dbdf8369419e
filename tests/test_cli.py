"""Tests for easydiff.cli module."""

import shutil

import pytest
import yaml
from typer.testing import CliRunner

from easydiff.cli import app
from easydiff.config import get_global_config_file, get_repo_config_file
from easydiff.diff import parse_diff
from easydiff.git import GitCommandError, NotARepositoryError, get_file_diff

runner = CliRunner()

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


class TestMainCommand:
    """Tests for the root callback."""

    def test_version(self):
        """Test --version output."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("easydiff ")

    def test_help_without_command(self):
        """Test that running without a command prints help."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "stage" in result.output
        assert "browse" in result.output


class TestErrorsOutsideRepository:
    """Tests for commands run outside a repository."""

    def test_status(self, mocker):
        """Test status outside a repository."""
        mocker.patch(
            "easydiff.cli.status.get_repo_root",
            side_effect=NotARepositoryError("Not in a git repository."),
        )

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "Error: Not in a git repository." in result.output

    def test_stage(self, mocker):
        """Test stage outside a repository."""
        mocker.patch(
            "easydiff.cli.stage.get_repo_root",
            side_effect=NotARepositoryError("Not in a git repository."),
        )

        result = runner.invoke(app, ["stage", "a.py"])

        assert result.exit_code == 1
        assert "error" in result.output.lower()

    def test_both_selectors(self):
        """Test that --hunk and --line are exclusive."""
        result = runner.invoke(app, ["stage", "a.py", "--hunk", "1", "--line", "3"])

        assert result.exit_code == 1
        assert "either --hunk or --line" in result.output

    def test_stage_failure_reported(self, mocker, temp_dir):
        """Test that a git failure during staging exits with an error."""
        mocker.patch("easydiff.cli.stage.get_repo_root", return_value=temp_dir)
        mocker.patch(
            "easydiff.cli.stage.stage_file",
            side_effect=GitCommandError("Git command failed: git add -- a.py"),
        )

        result = runner.invoke(app, ["stage", "a.py"])

        assert result.exit_code == 1
        assert "Git command failed" in result.output


@requires_git
class TestStatusCommand:
    """Tests for the status command."""

    def test_lists_sections(self, two_hunk_repo, monkeypatch):
        """Test that changed files are listed by section."""
        (two_hunk_repo / "new.txt").write_text("x\n")
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["status", "--no-color"])

        assert result.exit_code == 0
        assert "Unstaged Changes" in result.output
        assert "Staged Changes" not in result.output
        assert "M  app.txt" in result.output
        assert "?  new.txt" in result.output

    def test_clean(self, temp_repo, monkeypatch):
        """Test the clean working tree message."""
        monkeypatch.chdir(temp_repo)

        result = runner.invoke(app, ["status", "--no-color"])

        assert result.exit_code == 0
        assert "Working tree clean" in result.output


@requires_git
class TestShowAndHunksCommands:
    """Tests for the show and hunks commands."""

    def test_show(self, two_hunk_repo, monkeypatch):
        """Test that show prints the file with inline changes."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["show", "app.txt", "--no-color"])

        assert result.exit_code == 0
        assert "+ line 2 changed" in result.output
        assert "- line 2" in result.output
        assert "+ inserted near the end" in result.output

    def test_show_staged_without_changes(self, two_hunk_repo, monkeypatch):
        """Test that a file without staged changes shows plain content."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["show", "app.txt", "--staged", "--no-color"])

        assert result.exit_code == 0
        assert "line 2" in result.output
        assert "line 2 changed" not in result.output

    def test_hunks(self, two_hunk_repo, monkeypatch):
        """Test the hunk listing."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["hunks", "app.txt"])

        assert result.exit_code == 0
        assert "[1] lines 1-5  (+1 -1)  @@ -1,5 +1,5 @@" in result.output
        assert "[2] lines 15-21  (+1 -0)  @@ -15,6 +15,7 @@" in result.output
        assert "Total: 2 hunk(s)" in result.output

    def test_hunks_none_staged(self, two_hunk_repo, monkeypatch):
        """Test the message when the staged diff is empty."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["hunks", "app.txt", "--staged"])

        assert result.exit_code == 0
        assert "No staged hunks in app.txt" in result.output


@requires_git
class TestStageCommands:
    """Tests for the stage and unstage commands."""

    def _staged_hunks(self, repo):
        return parse_diff(get_file_diff("app.txt", staged=True, repo_root=repo)).hunks

    def test_stage_hunk_by_number(self, two_hunk_repo, monkeypatch):
        """Test staging the second hunk."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["stage", "app.txt", "--hunk", "2"])

        assert result.exit_code == 0
        assert "Staged hunk @@ -15,6 +15,7 @@" in result.output
        assert result.output.rstrip().endswith("in app.txt")
        staged = self._staged_hunks(two_hunk_repo)
        assert len(staged) == 1
        assert "+inserted near the end" in staged[0].lines

    def test_stage_hunk_by_line(self, two_hunk_repo, monkeypatch):
        """Test staging the hunk covering a line."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["stage", "app.txt", "--line", "2"])

        assert result.exit_code == 0
        assert "+line 2 changed" in self._staged_hunks(two_hunk_repo)[0].lines

    def test_hunk_out_of_range(self, two_hunk_repo, monkeypatch):
        """Test a hunk number past the end."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["stage", "app.txt", "--hunk", "3"])

        assert result.exit_code == 1
        assert "Hunk 3 out of range (1-2)" in result.output

    def test_no_hunk_at_line(self, two_hunk_repo, monkeypatch):
        """Test a line between hunks."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["stage", "app.txt", "--line", "10"])

        assert result.exit_code == 1
        assert "No hunk at line 10" in result.output

    def test_stage_and_unstage_whole_file(self, two_hunk_repo, monkeypatch):
        """Test whole-file staging round trip."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["stage", "app.txt"])
        assert result.exit_code == 0
        assert "Staged app.txt" in result.output
        assert len(self._staged_hunks(two_hunk_repo)) == 2

        result = runner.invoke(app, ["unstage", "app.txt"])
        assert result.exit_code == 0
        assert "Unstaged app.txt" in result.output
        assert self._staged_hunks(two_hunk_repo) == []

    def test_unstage_hunk(self, two_hunk_repo, monkeypatch):
        """Test unstaging one hunk of a fully staged file."""
        monkeypatch.chdir(two_hunk_repo)
        runner.invoke(app, ["stage", "app.txt"])

        result = runner.invoke(app, ["unstage", "app.txt", "--hunk", "1"])

        assert result.exit_code == 0
        assert "Unstaged hunk @@ -1,5 +1,5 @@ in app.txt" in result.output
        staged = self._staged_hunks(two_hunk_repo)
        assert len(staged) == 1
        assert "+inserted near the end" in staged[0].lines

    def test_path_from_subdirectory(self, two_hunk_repo, monkeypatch):
        """Test that paths typed in a subdirectory are rebased to the root."""
        sub = two_hunk_repo / "sub"
        sub.mkdir()
        (sub / "file.txt").write_text("hi\n")
        monkeypatch.chdir(sub)

        result = runner.invoke(app, ["stage", "file.txt"])

        assert result.exit_code == 0
        assert "Staged sub/file.txt" in result.output


@requires_git
class TestBrowseCommand:
    """Tests for the interactive browse command."""

    def test_quit(self, two_hunk_repo, monkeypatch):
        """Test that q ends the session."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["browse", "--no-color"], input="q\n")

        assert result.exit_code == 0
        assert "app.txt [unstaged]" in result.output

    def test_stage_hunk_interactively(self, two_hunk_repo, monkeypatch):
        """Test moving the cursor and staging a hunk."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["browse", "--no-color"], input=":2\ns\nq\n")

        assert result.exit_code == 0
        assert "EasyDiff: Staged hunk" in result.output
        assert "Staged Changes" in result.output

    def test_end_of_input_closes(self, two_hunk_repo, monkeypatch):
        """Test that running out of input closes the session."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["browse", "--no-color"], input="")

        assert result.exit_code == 0

    def test_help_and_unknown_key(self, two_hunk_repo, monkeypatch):
        """Test the ? listing and the unknown key message."""
        monkeypatch.chdir(two_hunk_repo)

        result = runner.invoke(app, ["browse", "--no-color"], input="?\nz\nq\n")

        assert "Stage current hunk" in result.output
        assert "No binding for 'z'" in result.output


class TestConfigCommands:
    """Tests for the config subcommands."""

    def test_init_writes_global_file(self):
        """Test writing the default global configuration."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Wrote default configuration" in result.output
        data = yaml.safe_load(get_global_config_file().read_text())
        assert data["keymaps"]["stage"] == "s"

    def test_init_existing(self):
        """Test that an existing file is kept without --force."""
        runner.invoke(app, ["config", "init"])

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_init_repo(self, mocker, temp_dir):
        """Test writing the repository configuration."""
        mocker.patch("easydiff.cli.config.get_repo_root", return_value=temp_dir)

        result = runner.invoke(app, ["config", "init", "--repo"])

        assert result.exit_code == 0
        assert get_repo_config_file(temp_dir).exists()

    def test_show(self, mocker, temp_dir):
        """Test showing the effective configuration."""
        mocker.patch("easydiff.cli.config.get_repo_root", return_value=temp_dir)
        repo_file = get_repo_config_file(temp_dir)
        repo_file.parent.mkdir(parents=True)
        repo_file.write_text("explorer_width: 44\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "explorer_width: 44" in result.output
        assert "(not found)" in result.output

    def test_show_invalid(self, mocker, temp_dir):
        """Test that an invalid file is reported."""
        mocker.patch("easydiff.cli.config.get_repo_root", return_value=temp_dir)
        repo_file = get_repo_config_file(temp_dir)
        repo_file.parent.mkdir(parents=True)
        repo_file.write_text("explorer_width: 2\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Error reading configuration" in result.output

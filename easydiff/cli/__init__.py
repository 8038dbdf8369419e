"""CLI entry point for easydiff.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from easydiff.cli.browse import browse_command
from easydiff.cli.config import config_app
from easydiff.cli.main import main_command
from easydiff.cli.show import hunks_command, show_command
from easydiff.cli.stage import stage_command, unstage_command
from easydiff.cli.status import status_command

# Main application
app = typer.Typer(
    name="easydiff",
    help="easydiff: inline git diff viewer with hunk-level staging",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("status")(status_command)
app.command("show")(show_command)
app.command("hunks")(hunks_command)
app.command("stage")(stage_command)
app.command("unstage")(unstage_command)
app.command("browse")(browse_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
    "status_command",
    "show_command",
    "hunks_command",
    "stage_command",
    "unstage_command",
    "browse_command",
]

"""Root CLI callback."""

import typer

from easydiff import __version__
from easydiff.cli.utils import configure_logging


def main_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the easydiff version and exit",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Log git invocations and parser details to stderr",
    ),
) -> None:
    """Inline git diff viewer with hunk-level staging."""
    if version:
        typer.echo(f"easydiff {__version__}")
        raise typer.Exit(0)

    configure_logging(debug)

    # If a subcommand is invoked, let it run
    if ctx.invoked_subcommand is not None:
        return

    typer.echo(ctx.get_help())

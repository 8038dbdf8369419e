"""CLI command for listing changed files."""

import typer

from easydiff.cli.utils import fail, load_effective_config
from easydiff.git import GitError, get_repo_root, get_status
from easydiff.view.explorer import EXPLORER_NAMESPACE, build_explorer
from easydiff.view.terminal import TerminalHost


def status_command(
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Show staged and unstaged changes."""
    try:
        repo_root = get_repo_root()
        status = get_status(repo_root)
    except GitError as e:
        fail(str(e))

    config = load_effective_config(repo_root)
    model = build_explorer(status)

    host = TerminalHost(config, color=not no_color)
    buf = host.create_scratch_buffer("EasyDiff://Explorer")
    host.set_lines(buf, model.lines)
    for highlight in model.highlights:
        host.add_decoration(buf, EXPLORER_NAMESPACE, highlight)

    for line in host.render_buffer(buf, numbers=False):
        typer.echo(line.rstrip())

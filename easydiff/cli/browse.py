"""Interactive CLI session.

Each prompt reads one key (or key name) and dispatches it to the bindings
of the focused pane, the same way an editor would. `:N` moves the cursor of
the focused pane to line N, `?` lists the bindings.
"""

import typer

from easydiff.cli.utils import fail, load_effective_config
from easydiff.git import GitError, get_repo_root
from easydiff.view.session import DiffSession
from easydiff.view.terminal import TerminalHost


def _draw(host: TerminalHost, session: DiffSession) -> None:
    focused_explorer = host.current_win == session.explorer_win
    typer.echo(typer.style("Files" + (" *" if focused_explorer else ""), bold=True))
    for line in host.render_window(session.explorer_win, numbers=False, show_cursor=True):
        typer.echo(line.rstrip())

    typer.echo()
    title = session.current_path or "(no file selected)"
    if session.current_path:
        title += " [staged]" if session.is_staged_view else " [unstaged]"
    typer.echo(typer.style(title + ("" if focused_explorer else " *"), bold=True))
    for line in host.render_window(session.diff_win, show_cursor=True):
        typer.echo(line)
    typer.echo()


def _show_help(host: TerminalHost) -> None:
    buf = host.current_buffer()
    if buf is None:
        return
    for key, desc in host.keymap_help(buf):
        typer.echo(f"  {key:<10} {desc}")
    typer.echo("  :N         Move cursor to line N")


def browse_command(
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Browse changes interactively and stage or unstage hunks."""
    try:
        repo_root = get_repo_root()
    except GitError as e:
        fail(str(e))

    config = load_effective_config(repo_root)
    host = TerminalHost(config, color=not no_color)
    session = DiffSession(host, config, cwd=repo_root)

    if not session.open():
        raise typer.Exit(1)

    while session.is_open:
        _draw(host, session)
        try:
            key = typer.prompt("key", default="", show_default=False)
        except typer.Abort:
            session.close()
            break

        if key.startswith(":"):
            try:
                host.set_cursor(host.current_win, int(key[1:]))
            except ValueError:
                typer.echo(f"Not a line number: {key[1:]}", err=True)
            continue
        if key == "?":
            _show_help(host)
            continue
        if not host.press(key):
            typer.echo(f"No binding for {key!r} (? for help)", err=True)

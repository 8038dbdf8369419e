"""CLI commands for configuration management."""

import typer
import yaml

from easydiff import config as easydiff_config
from easydiff.config import ConfigError, EasyDiffConfig
from easydiff.git import GitError, get_repo_root

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage easydiff configuration (~/.easydiff/ and <repo>/.easydiff/)",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    repo_root = None
    try:
        repo_root = get_repo_root()
    except GitError:
        pass

    try:
        config = easydiff_config.load_config(repo_root)
    except ConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    global_file = easydiff_config.get_global_config_file()
    typer.echo("Effective easydiff configuration:")
    typer.echo()
    typer.echo(f"  Global file: {global_file}" + ("" if global_file.exists() else " (not found)"))
    if repo_root is not None:
        repo_file = easydiff_config.get_repo_config_file(repo_root)
        typer.echo(f"  Repository file: {repo_file}" + ("" if repo_file.exists() else " (not found)"))
    typer.echo()
    typer.echo(yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False).rstrip())


@config_app.command("init")
def config_init(
    repo: bool = typer.Option(
        False,
        "--repo",
        help="Write <repo>/.easydiff/config.yaml instead of the global file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing configuration file",
    ),
) -> None:
    """Write the default configuration to a file."""
    try:
        if repo:
            path = easydiff_config.get_repo_config_file(get_repo_root())
        else:
            path = easydiff_config.get_global_config_file()
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if path.exists() and not force:
        typer.echo(f"Configuration already exists: {path}")
        typer.echo("Use --force to overwrite it.")
        raise typer.Exit(0)

    try:
        easydiff_config.save_config(path, EasyDiffConfig())
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Wrote default configuration to {path}")

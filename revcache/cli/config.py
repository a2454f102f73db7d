"""CLI commands for repository configuration management."""

from pathlib import Path

import typer

from revcache.git import GitError, get_repo_root
from revcache.user_config import DEFAULT_CONFIG, get_config_file, load_config, set_config_value

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage revcache configuration in .revcache/config.yaml",
    add_completion=False,
)

_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0")


def _repo_root() -> Path:
    try:
        return get_repo_root()
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _parse_value(key: str, value: str):
    """Convert value to the type of the default of key.

    Raises:
        ValueError: If key takes a boolean and value is not one.
    """
    if not isinstance(DEFAULT_CONFIG[key], bool):
        return value
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} expects true or false, got {value!r}")


@config_app.command("show")
def config_show() -> None:
    """Show the configuration of the current repository."""
    repo_root = _repo_root()
    config = load_config(repo_root)

    typer.echo(f"revcache configuration ({get_config_file(repo_root)}):")
    typer.echo()
    for key in DEFAULT_CONFIG:
        typer.echo(f"  {key}: {config[key]}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"One of: {', '.join(DEFAULT_CONFIG)}"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set one configuration key of the current repository."""
    if key not in DEFAULT_CONFIG:
        typer.echo(f"Unknown configuration key: {key}", err=True)
        typer.echo(f"Valid keys: {', '.join(DEFAULT_CONFIG)}", err=True)
        raise typer.Exit(1)

    try:
        parsed = _parse_value(key, value)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    repo_root = _repo_root()
    try:
        set_config_value(repo_root, key, parsed)
    except OSError as e:
        typer.echo(f"Error writing configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Set {key} = {parsed}")

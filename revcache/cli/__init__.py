"""CLI entry point for revcache.

This module provides the main CLI application that combines all
commands into a single interface.
"""

import typer

from revcache import __version__
from revcache.cli.config import config_app
from revcache.cli.files import files_command, wip_command
from revcache.cli.log import log_command, refs_command
from revcache.cli.utils import configure_logging, open_repository


def _main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """revcache: inspect the files changed by git commits."""
    if version:
        typer.echo(f"revcache {__version__}")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)
    configure_logging(verbose)


# Main application
app = typer.Typer(
    name="revcache",
    help="revcache: inspect the files changed by git commits",
    add_completion=False,
)

app.callback(invoke_without_command=True)(_main_callback)

# Add individual commands
app.command("files")(files_command)
app.command("wip")(wip_command)
app.command("log")(log_command)
app.command("refs")(refs_command)

# Add subcommand groups
app.add_typer(config_app, name="config")


__all__ = [
    "app",
    "config_app",
    "files_command",
    "wip_command",
    "log_command",
    "refs_command",
    "open_repository",
]

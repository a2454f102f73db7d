"""Shared utility functions for CLI commands."""

import logging

import typer

from revcache.git import GitError
from revcache.repository import GitRepository


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def open_repository(load: bool = True) -> GitRepository:
    """Open the repository of the current directory, exiting on failure.

    Args:
        load: Load references, the working directory and the commit log.
    """
    try:
        repo = GitRepository.open()
        if load:
            repo.load()
        return repo
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

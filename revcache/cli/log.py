"""CLI commands showing the commit log and references."""

import typer

from revcache.formatters import format_commit
from revcache.git import GitError
from revcache.models import ZERO_SHA
from revcache.cli.utils import open_repository


def log_command(
    max_count: int = typer.Option(
        20,
        "--max-count",
        "-n",
        help="Number of commits to show (0 for all)",
    ),
) -> None:
    """Show the commit log with the working directory on top."""
    repo = open_repository()

    commits = repo.cache.commits()
    if max_count > 0:
        commits = commits[:max_count]

    for commit in commits:
        line = format_commit(commit) if commit.sha != ZERO_SHA else f"  (working directory) {commit.short_log}"
        names = repo.get_ref_names(commit.sha)
        if names:
            line += f"  [{', '.join(names)}]"
        typer.echo(line)

    typer.echo()
    typer.echo(f"Total: {repo.cache.count()} commit(s)")


def refs_command() -> None:
    """Show every commit that carries a reference."""
    repo = open_repository(load=False)

    try:
        repo.load_refs()
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not repo.refs:
        typer.echo("  (no references)")
        return

    for sha in sorted(repo.refs):
        names = repo.get_ref_names(sha)
        typer.echo(f"{sha[:8]}  {', '.join(names) if names else 'HEAD'}")
    typer.echo()
    typer.echo(f"Current branch: {repo.current_branch or 'HEAD (detached)'}")

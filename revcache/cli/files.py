"""CLI commands listing the files changed by a commit."""

import typer

from revcache.formatters import format_revision_file, summarize_revision_file
from revcache.git import GitError, resolve_revision
from revcache.cli.utils import open_repository


def files_command(
    revision: str = typer.Argument(
        ...,
        help="Commit to inspect (sha, branch or tag)",
    ),
    against: str = typer.Option(
        "",
        "--against",
        "-a",
        help="Compare with this commit instead of the first parent",
    ),
    all_parents: bool = typer.Option(
        False,
        "--all",
        help="For a merge commit, list the changes against every parent",
    ),
    show_parent: bool = typer.Option(
        False,
        "--parents",
        "-p",
        help="Show which parent each change was computed against",
    ),
) -> None:
    """List the files changed by a commit."""
    repo = open_repository()

    try:
        sha = resolve_revision(revision, cwd=repo.workdir)
        diff_to = resolve_revision(against, cwd=repo.workdir) if against else ""
        rf = repo.get_diff_files(sha, diff_to, all_parents)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if rf is None:
        typer.echo(f"No file changes available for {revision} (root commit?)")
        raise typer.Exit(0)

    for line in format_revision_file(rf, show_parent=show_parent):
        typer.echo(line)
    typer.echo()
    typer.echo(f"Total: {summarize_revision_file(rf)}")


def wip_command() -> None:
    """List uncommitted changes, staged (I), conflicted (C) and untracked (?)."""
    repo = open_repository(load=False)

    try:
        repo.update_wip_revision()
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    rf = repo.get_wip_files()
    if repo.is_nothing_to_commit() and not repo.workdir_info.other_files:
        typer.echo("No local changes")
        return

    for line in format_revision_file(rf):
        typer.echo(line)

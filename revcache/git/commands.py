"""Git queries whose output feeds the revision cache.

Contains:
- diff_tree: Raw diff of a commit, with rename detection when possible
- diff_index: Raw diff of the work tree or the index against a commit
- list_other_files: Untracked files
- show_refs: All references, dereferencing annotated tags
- get_head_sha: Sha of HEAD, empty for a repository without commits
- get_current_branch: Current branch name, empty when detached
- get_status: Human readable git status
- get_log_stream: The NUL separated commit log of every reachable commit
- resolve_revision: Resolve a revision name to a commit sha
"""

import logging
from pathlib import Path
from typing import Optional

from revcache.git.exceptions import GitError
from revcache.git.runner import _run_git_command, _run_git_command_bytes
from revcache.log_stream import GIT_LOG_ARGS

logger = logging.getLogger(__name__)


_DIFF_TREE_ARGS = ["diff-tree", "--no-color", "-r", "-m"]


def diff_tree(revisions: list[str], cwd: Optional[Path] = None, rename_detection: bool = True) -> str:
    """Get the raw diff-tree output for revisions.

    git can refuse inexact rename detection on very large diffs ("too
    many files, skipping inexact rename detection"). In that case the
    command is run again without ``-C``.

    Args:
        revisions: ``[sha]`` for a commit against its parents, or
            ``[from_sha, to_sha]``.
        cwd: Repository work tree.
        rename_detection: Try ``-C`` first.

    Returns:
        Raw diff-tree output.

    Raises:
        GitError: If the command without rename detection fails too.
    """
    if rename_detection:
        try:
            return _run_git_command(_DIFF_TREE_ARGS + ["-C"] + revisions, cwd=cwd, strip=False)
        except GitError as e:
            logger.warning("Rename detection failed, retrying without it: %s", e)

    return _run_git_command(_DIFF_TREE_ARGS + revisions, cwd=cwd, strip=False)


def diff_index(head: str, cached: bool = False, cwd: Optional[Path] = None) -> str:
    """Get the raw diff-index output against head.

    Args:
        head: Commit to compare with.
        cached: Compare the index instead of the work tree.
        cwd: Repository work tree.
    """
    args = ["diff-index"]
    if cached:
        args.append("--cached")
    args.append(head)
    return _run_git_command(args, cwd=cwd, strip=False)


def list_other_files(cwd: Optional[Path] = None, exclude_per_directory: str = ".gitignore") -> list[str]:
    """Get the files present in the work tree but not tracked by git.

    Honours ``.git/info/exclude`` when it exists and the per-directory
    exclude file (``.gitignore`` by default).
    """
    args = ["ls-files", "--others"]

    exclude_file = Path(".git") / "info" / "exclude"
    base = Path(cwd) if cwd else Path.cwd()
    if (base / exclude_file).exists():
        args.append(f"--exclude-from={exclude_file.as_posix()}")

    args.append(f"--exclude-per-directory={exclude_per_directory}")

    output = _run_git_command(args, cwd=cwd, strip=False)
    return [line for line in output.split("\n") if line]


def show_refs(cwd: Optional[Path] = None) -> str:
    """Get ``git show-ref -d`` output, empty if the repository has no refs."""
    try:
        return _run_git_command(["show-ref", "-d"], cwd=cwd)
    except GitError:
        # show-ref exits with 1 when there is nothing to show
        return ""


def get_head_sha(cwd: Optional[Path] = None) -> str:
    """Get the sha of HEAD.

    Returns:
        The sha, or an empty string if the repository has no commits yet.
    """
    try:
        return _run_git_command(["rev-parse", "--revs-only", "HEAD"], cwd=cwd)
    except GitError:
        return ""


def get_current_branch(cwd: Optional[Path] = None) -> str:
    """Get the current branch name, empty when HEAD is detached."""
    return _run_git_command(["branch", "--show-current"], cwd=cwd)


def get_status(cwd: Optional[Path] = None) -> str:
    """Get ``git status`` output. Running it also refreshes the index."""
    return _run_git_command(["status"], cwd=cwd)


def get_log_stream(cwd: Optional[Path] = None) -> bytes:
    """Get the raw commit log of every reachable commit."""
    return _run_git_command_bytes(GIT_LOG_ARGS, cwd=cwd)


def resolve_revision(revision: str, cwd: Optional[Path] = None) -> str:
    """Resolve a revision name (branch, tag, abbreviated sha) to a commit sha.

    Raises:
        GitError: If revision does not name a commit.
    """
    return _run_git_command(["rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"], cwd=cwd)

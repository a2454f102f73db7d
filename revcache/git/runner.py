"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its text output
- _run_git_command_bytes: Run a git command and return its raw output
- get_repo_root: Get the root directory of a git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from revcache.git.exceptions import GitError, NotARepositoryError

logger = logging.getLogger(__name__)


def _run(args: list[str], cwd: Optional[Path], text: bool) -> subprocess.CompletedProcess:
    logger.debug("Running: git %s", " ".join(args))
    try:
        return subprocess.run(
            ["git"] + args,
            cwd=cwd,
            capture_output=True,
            text=text,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def _run_git_command(args: list[str], cwd: Optional[Path] = None, strip: bool = True) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in (defaults to the current directory).
        strip: Strip surrounding whitespace from the output. Raw diff
            output is kept as is so trailing tabs in paths survive.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    result = _run(args, cwd, text=True)
    return result.stdout.strip() if strip else result.stdout


def _run_git_command_bytes(args: list[str], cwd: Optional[Path] = None) -> bytes:
    """Run a git command and return its undecoded output.

    Used for ``-z`` output, where records are separated by NUL bytes.

    Raises:
        GitError: If the command fails.
    """
    return _run(args, cwd, text=False).stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Get the root directory of the git repository containing cwd.

    Returns:
        Path to the repository root.

    Raises:
        NotARepositoryError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
        return Path(root)
    except GitError:
        raise NotARepositoryError("Not in a git repository. Please run this command from within a git repo.")

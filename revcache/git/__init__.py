"""Git access module for revcache.

This package runs the git commands whose output revcache parses:
- exceptions: GitError, NotARepositoryError
- runner: _run_git_command, _run_git_command_bytes, get_repo_root
- commands: diff_tree, diff_index, list_other_files, show_refs,
            get_head_sha, get_current_branch, get_status, get_log_stream,
            resolve_revision
"""

# Exceptions
from revcache.git.exceptions import (
    GitError,
    NotARepositoryError,
)

# Runner utilities
from revcache.git.runner import (
    _run_git_command,
    _run_git_command_bytes,
    get_repo_root,
)

# Queries
from revcache.git.commands import (
    diff_tree,
    diff_index,
    list_other_files,
    show_refs,
    get_head_sha,
    get_current_branch,
    get_status,
    get_log_stream,
    resolve_revision,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotARepositoryError",
    # Runner
    "_run_git_command",
    "_run_git_command_bytes",
    "get_repo_root",
    # Queries
    "diff_tree",
    "diff_index",
    "list_other_files",
    "show_refs",
    "get_head_sha",
    "get_current_branch",
    "get_status",
    "get_log_stream",
    "resolve_revision",
]

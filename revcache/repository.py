"""Repository session for revcache.

A GitRepository owns everything built from one repository: the name
table, the revision cache, the reference map and the last working
directory snapshot. Reloading clears all of it and rebuilds it from git.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from revcache.cache import RevisionsCache, merge_files_key
from revcache.git.commands import (
    diff_index,
    diff_tree,
    get_current_branch,
    get_head_sha,
    get_log_stream,
    get_status,
    list_other_files,
    show_refs,
)
from revcache.git.runner import get_repo_root
from revcache.log_stream import decode_commit_stream
from revcache.models import ZERO_SHA, CommitInfo, RevisionFile, WorkingDirInfo
from revcache.names import NameTable
from revcache.parser import parse_revision_file
from revcache.refs import Reference, RefType, check_ref, get_ref_names, parse_show_ref
from revcache.user_config import load_config
from revcache.workdir import find_file_index, synthesize_workdir_files

logger = logging.getLogger(__name__)


class GitRepository:
    """Revision data of one git repository."""

    def __init__(self, workdir: Path, config: Optional[dict] = None) -> None:
        self.workdir = Path(workdir)
        self.config = config if config is not None else load_config(self.workdir)
        self.names = NameTable()
        self.cache = RevisionsCache()
        self.refs: dict[str, Reference] = {}
        self.workdir_info = WorkingDirInfo()
        self.current_branch = ""
        self.is_loading = False

    @classmethod
    def open(cls, path: Optional[Path] = None) -> "GitRepository":
        """Open the repository containing path (default: current directory).

        Raises:
            NotARepositoryError: If path is not inside a git work tree.
        """
        return cls(get_repo_root(path))

    def clear(self) -> None:
        """Forget every commit, RevisionFile and interned name.

        The name table is replaced, not emptied: RevisionFiles handed out
        before the reload keep resolving their paths through the old one.
        """
        self.cache.clear()
        self.names = NameTable()
        self.workdir_info.clear()

    def load(self) -> bool:
        """Reload references, the working directory and the commit log.

        Returns:
            False if a load is already running, True otherwise.

        Raises:
            GitError: If a git command fails. The cache is left empty.
        """
        if self.is_loading:
            return False

        logger.info("Loading repository %s", self.workdir)
        self.clear()
        self.is_loading = True
        try:
            self.load_refs()
            stream = get_log_stream(cwd=self.workdir)
            self.process_revisions(stream)
        finally:
            self.is_loading = False

        logger.info("Loaded %d commits", self.cache.count())
        return True

    def load_refs(self) -> None:
        """Rebuild the reference map from git show-ref."""
        self.current_branch = get_current_branch(cwd=self.workdir)
        head = get_head_sha(cwd=self.workdir)
        self.refs = parse_show_ref(show_refs(cwd=self.workdir), head)

    def process_revisions(self, stream: bytes) -> int:
        """Insert the working directory, then every commit of stream.

        Returns:
            Number of commits decoded from stream.
        """
        self.update_wip_revision()

        commits = decode_commit_stream(stream)
        for commit in commits:
            self.cache.insert_commit_info(commit)
        return len(commits)

    def update_wip_revision(self) -> None:
        """Rebuild the working directory pseudo-commit under ZERO_SHA.

        Nothing is inserted if a git command fails.
        """
        # git status refreshes the index, run it first
        status = get_status(cwd=self.workdir)
        head = get_head_sha(cwd=self.workdir)

        info = WorkingDirInfo()
        if head:
            info.diff_index = diff_index(head, cwd=self.workdir)
            info.diff_index_cached = diff_index(head, cached=True, cwd=self.workdir)
        if self.config.get("include_untracked", True):
            info.other_files = list_other_files(
                cwd=self.workdir,
                exclude_per_directory=self.config.get("exclude_per_directory", ".gitignore"),
            )

        rf = synthesize_workdir_files(info, self.names)
        self.workdir_info = info
        self.cache.insert_revision_file(ZERO_SHA, rf)

        log = "No local changes" if self.is_nothing_to_commit() else "Local changes"
        self.cache.update_wip_commit(
            CommitInfo(
                sha=ZERO_SHA,
                parents=[head] if head else [],
                committer="-",
                author="-",
                date=int(time.time()),
                short_log=log,
                long_log=status,
                is_diff_cache=True,
            )
        )

    def insert_new_files(self, key: str, raw: str) -> RevisionFile:
        """Parse raw diff output and cache it under key."""
        rf = parse_revision_file(raw, self.names)
        self.cache.insert_revision_file(key, rf)
        return rf

    def get_wip_files(self) -> Optional[RevisionFile]:
        return self.cache.get_revision_file(ZERO_SHA)

    def get_commit_files(self, sha: str) -> Optional[RevisionFile]:
        """Get the files changed by sha against its first parent.

        Returns:
            The RevisionFile, or None for an unknown or root commit.
        """
        if sha == ZERO_SHA:
            return self.get_wip_files()
        return self.get_diff_files(sha)

    def get_diff_files(self, sha: str, diff_to_sha: str = "", all_files: bool = False) -> Optional[RevisionFile]:
        """Get the files changed by sha, running git diff-tree on a cache miss.

        Args:
            sha: The commit.
            diff_to_sha: Commit to compare with (default: first parent).
            all_files: For a merge without diff_to_sha, list the changes
                against every parent under the ALL_MERGE_FILES key.

        Returns:
            The RevisionFile, or None for an unknown or root commit. For
            ZERO_SHA the working directory files, whatever diff_to_sha is.

        Raises:
            GitError: If git diff-tree fails.
        """
        if sha == ZERO_SHA:
            return self.get_wip_files()

        commit = self.cache.get_commit_info(sha)
        if commit is None or commit.parents_count() == 0:
            return None

        if commit.parents_count() > 1 and not diff_to_sha and all_files:
            key = merge_files_key(sha)
            revisions = [sha]
        else:
            base = diff_to_sha or commit.parents[0]
            key = sha if base == commit.parents[0] else f"{base}..{sha}"
            revisions = [base, sha]

        rf = self.cache.get_revision_file(key)
        if rf is not None:
            return rf

        raw = diff_tree(revisions, cwd=self.workdir, rename_detection=self.config.get("rename_detection", True))
        if len(revisions) == 1:
            # -m prints the commit id before every parent section; drop the
            # first so sections are numbered from parent 1
            raw = raw.split("\n", 1)[1] if raw.startswith(sha) and "\n" in raw else raw
        return self.insert_new_files(key, raw)

    def file_path(self, rf: RevisionFile, i: int) -> str:
        return rf.path_at(i)

    def find_file_index(self, rf: RevisionFile, name: str) -> int:
        return find_file_index(rf, name)

    def is_nothing_to_commit(self) -> bool:
        """True if the working directory has no changes besides untracked files."""
        rf = self.get_wip_files()
        if rf is None:
            return True
        return rf.count() == len(self.workdir_info.other_files)

    def check_ref(self, sha: str, mask: RefType = RefType.ANY_REF) -> RefType:
        return check_ref(self.refs, sha, mask)

    def get_ref_names(self, sha: str, mask: RefType = RefType.ANY_REF) -> list[str]:
        return get_ref_names(self.refs, sha, mask)

"""In-memory revision cache.

Holds, for one repository session, the decoded commits in log order and
the parsed RevisionFile of every commit whose files were requested.
Entries are never evicted one by one; a repository refresh clears the
whole cache and repopulates it.
"""

import logging
from typing import Optional

from revcache.models import ALL_MERGE_FILES, ZERO_SHA, CommitInfo, RevisionFile

logger = logging.getLogger(__name__)


def merge_files_key(sha: str) -> str:
    """Cache key of the aggregate files of every parent of a merge commit."""
    return ALL_MERGE_FILES + sha


class RevisionsCache:
    """Commit metadata and parsed file changes keyed by commit sha.

    ``generation`` increases on every clear() so a reader holding an old
    value can tell that a refresh happened in between.
    """

    def __init__(self) -> None:
        self._commits: dict[str, CommitInfo] = {}
        self._rows: list[str] = []
        self._files: dict[str, RevisionFile] = {}
        self.generation = 0

    # Commits

    def insert_commit_info(self, commit: CommitInfo) -> None:
        if commit.sha not in self._commits:
            self._rows.append(commit.sha)
        self._commits[commit.sha] = commit

    def update_wip_commit(self, commit: CommitInfo) -> None:
        """Insert or replace the working directory pseudo-commit, always first."""
        commit.sha = ZERO_SHA
        self._commits[ZERO_SHA] = commit
        if ZERO_SHA not in self._rows:
            self._rows.insert(0, ZERO_SHA)

    def get_commit_info(self, sha: str) -> Optional[CommitInfo]:
        return self._commits.get(sha)

    def get_commit_info_by_row(self, row: int) -> Optional[CommitInfo]:
        if 0 <= row < len(self._rows):
            return self._commits[self._rows[row]]
        return None

    def contains_commit_info(self, sha: str) -> bool:
        return sha in self._commits

    def count(self) -> int:
        return len(self._rows)

    def commits(self) -> list[CommitInfo]:
        """All commits in log order, the working directory first when present."""
        return [self._commits[sha] for sha in self._rows]

    # Revision files

    def insert_revision_file(self, sha: str, rf: RevisionFile) -> None:
        self._files[sha] = rf

    def get_revision_file(self, sha: str) -> Optional[RevisionFile]:
        """Return the cached files of sha, or None if not loaded yet."""
        return self._files.get(sha)

    def contains_revision_file(self, sha: str) -> bool:
        return sha in self._files

    def clear_revision_files(self) -> None:
        self._files.clear()

    def clear(self) -> None:
        """Drop every commit and every RevisionFile."""
        self._commits.clear()
        self._rows.clear()
        self._files.clear()
        self.generation += 1
        logger.debug("Revision cache cleared (generation %d)", self.generation)

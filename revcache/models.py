"""Data models for revcache.

Contains:
- FileStatus: Kind of change recorded for a file
- StatusFlag: Flags that combine with any FileStatus (conflict, staged)
- status_from_code: Map a git raw status letter to (FileStatus, StatusFlag)
- RevisionFile: The file changes of one commit or pseudo-commit
- CommitInfo: One decoded commit record from the log stream
- WorkingDirInfo: Raw git output describing the working directory
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Optional

from pydantic import BaseModel

from revcache.names import NameTable


# Sentinel id of the uncommitted working directory pseudo-commit
ZERO_SHA = "0000000000000000000000000000000000000000"

# Prefix of the cache key holding the files of every parent of a merge
ALL_MERGE_FILES = "ALL_MERGE_FILES"


class FileStatus(str, Enum):
    """Mutually exclusive kind of change for one file entry."""

    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    NEW = "N"  # Destination of a rename or copy
    UNKNOWN = "?"  # Untracked, or a status letter we do not recognise


class StatusFlag(IntFlag):
    """Flags orthogonal to FileStatus."""

    NONE = 0
    CONFLICT = 1
    IN_INDEX = 2


# Raw diff status letters (see git-diff-tree "RAW OUTPUT FORMAT")
_STATUS_CODES = {
    "M": (FileStatus.MODIFIED, StatusFlag.NONE),
    "T": (FileStatus.MODIFIED, StatusFlag.NONE),  # type change
    "A": (FileStatus.ADDED, StatusFlag.NONE),
    "D": (FileStatus.DELETED, StatusFlag.NONE),
    "U": (FileStatus.MODIFIED, StatusFlag.CONFLICT),  # unmerged
}


def status_from_code(code: str) -> tuple[FileStatus, StatusFlag]:
    """Map a raw status letter to a (kind, flags) pair.

    Unrecognised letters map to FileStatus.UNKNOWN.
    """
    return _STATUS_CODES.get(code, (FileStatus.UNKNOWN, StatusFlag.NONE))


@dataclass
class RevisionFile:
    """File changes of one commit, in the order git reported them.

    Paths are not stored as strings. ``paths_idx`` holds the interned
    directory indices of every entry followed by their file indices, and
    is written in one block by FileNamesLoader.flush().
    """

    names: NameTable = field(repr=False, compare=False)
    paths_idx: tuple[int, ...] = ()
    statuses: list[FileStatus] = field(default_factory=list)
    flags: list[StatusFlag] = field(default_factory=list)
    ext_status: list[Optional[str]] = field(default_factory=list)
    merge_parent: list[int] = field(default_factory=list)
    only_modified: bool = True

    def add_status(
        self,
        status: FileStatus,
        merge_parent: int,
        flags: StatusFlag = StatusFlag.NONE,
        ext_status: Optional[str] = None,
    ) -> None:
        """Append the status side of a new entry.

        The path side is appended through a FileNamesLoader bound to
        this RevisionFile.
        """
        self.statuses.append(status)
        self.flags.append(flags)
        self.ext_status.append(ext_status)
        self.merge_parent.append(merge_parent)
        if status != FileStatus.MODIFIED or flags:
            self.only_modified = False

    def append_flags(self, i: int, flags: StatusFlag) -> None:
        """OR flags onto an existing entry."""
        self.flags[i] |= flags
        if flags:
            self.only_modified = False

    def count(self) -> int:
        return len(self.statuses)

    def dir_at(self, i: int) -> int:
        return self.paths_idx[i]

    def name_at(self, i: int) -> int:
        return self.paths_idx[len(self.paths_idx) // 2 + i]

    def path_at(self, i: int) -> str:
        return self.names.path(self.dir_at(i), self.name_at(i))

    def paths(self) -> list[str]:
        return [self.path_at(i) for i in range(self.count())]

    def status_at(self, i: int) -> FileStatus:
        return self.statuses[i]

    def status_flags(self, i: int) -> StatusFlag:
        return self.flags[i]

    def has_flag(self, i: int, flag: StatusFlag) -> bool:
        return bool(self.flags[i] & flag)

    def extended_status_at(self, i: int) -> Optional[str]:
        return self.ext_status[i]

    def parent_index_at(self, i: int) -> int:
        return self.merge_parent[i]


class CommitInfo(BaseModel):
    """One commit decoded from the log stream."""

    sha: str
    parents: list[str] = []
    committer: str = ""
    author: str = ""
    date: int = 0  # Author timestamp, seconds since epoch
    short_log: str = ""
    long_log: str = ""
    boundary: bool = False
    row: int = 0
    is_diff_cache: bool = False  # True only for the working directory pseudo-commit

    def parents_count(self) -> int:
        return len(self.parents)


@dataclass
class WorkingDirInfo:
    """Raw git output needed to synthesize the working directory files."""

    diff_index: str = ""
    diff_index_cached: str = ""
    other_files: list[str] = field(default_factory=list)

    def clear(self) -> None:
        self.diff_index = ""
        self.diff_index_cached = ""
        self.other_files = []

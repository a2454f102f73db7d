"""Working directory pseudo-commit synthesis.

Builds the RevisionFile shown for uncommitted changes from three pieces
of git output:

- ``git diff-index HEAD``: every change between HEAD and the work tree
- ``git diff-index --cached HEAD``: the staged subset of those changes
- ``git ls-files --others``: untracked files

Contains:
- find_file_index: Find the entry of a path in a RevisionFile
- synthesize_workdir_files: Merge the three inputs into one RevisionFile
"""

from revcache.loader import FileNamesLoader
from revcache.models import FileStatus, RevisionFile, StatusFlag, WorkingDirInfo
from revcache.names import NameTable, split_path
from revcache.parser import parse_diff_format


def find_file_index(rf: RevisionFile, name: str) -> int:
    """Return the position of name in rf, or -1 if absent.

    The lookup compares strings, so rf may come from any parse session.
    """
    if not name:
        return -1

    directory, file_name = split_path(name)
    names = rf.names

    for i in range(rf.count()):
        if names.file_names[rf.name_at(i)] == file_name and names.dir_names[rf.dir_at(i)] == directory:
            return i

    return -1


def synthesize_workdir_files(info: WorkingDirInfo, names: NameTable) -> RevisionFile:
    """Build the RevisionFile of the working directory pseudo-commit.

    Args:
        info: Raw diff-index output, cached diff-index output and
            untracked paths.
        names: The name table of the repository session.

    Returns:
        A RevisionFile with the work tree changes followed by untracked
        files. Entries that are also staged carry StatusFlag.IN_INDEX, and
        StatusFlag.CONFLICT when the staged entry is a conflict.
    """
    rf = RevisionFile(names)
    cached = RevisionFile(names)

    with FileNamesLoader(names) as loader:
        parse_diff_format(rf, info.diff_index, loader)

        for path in info.other_files:
            if not path:
                continue
            loader.append(rf, path)
            rf.add_status(FileStatus.UNKNOWN, 1)

        parse_diff_format(cached, info.diff_index_cached, loader)

    rf.only_modified = False

    for i in range(rf.count()):
        j = find_file_index(cached, rf.path_at(i))
        if j == -1:
            continue
        if cached.has_flag(j, StatusFlag.CONFLICT):
            rf.append_flags(i, StatusFlag.CONFLICT)
        rf.append_flags(i, StatusFlag.IN_INDEX)

    return rf

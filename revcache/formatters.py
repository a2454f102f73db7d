"""Text rendering of revision data for the CLI."""

from datetime import datetime

from revcache.models import CommitInfo, FileStatus, RevisionFile, StatusFlag


def format_status(rf: RevisionFile, i: int) -> str:
    """Render the status column of entry i.

    The status letter is followed by ``C`` for a conflict and ``I`` for a
    change that is staged, e.g. ``MI`` or ``MCI``.
    """
    status = rf.status_at(i).value
    if rf.has_flag(i, StatusFlag.CONFLICT):
        status += "C"
    if rf.has_flag(i, StatusFlag.IN_INDEX):
        status += "I"
    return status


def format_revision_file(rf: RevisionFile, show_parent: bool = False) -> list[str]:
    """Render one line per file entry.

    Example output:
        M    src/main.py
        N    src/new.py    (src/old.py --> src/new.py (90%))
        D    src/old.py    (src/old.py --> src/new.py (90%))
    """
    lines = []
    for i in range(rf.count()):
        line = f"{format_status(rf, i):<4} {rf.path_at(i)}"
        ext = rf.extended_status_at(i)
        if ext:
            line += f"    ({ext})"
        if show_parent:
            line += f"    [parent {rf.parent_index_at(i)}]"
        lines.append(line)
    return lines


def format_commit(commit: CommitInfo) -> str:
    """Render a commit as a one line log entry."""
    date = datetime.fromtimestamp(commit.date).strftime("%Y-%m-%d %H:%M")
    marker = "-" if commit.boundary else "*"
    return f"{marker} {commit.sha[:8]} {date} {commit.author}  {commit.short_log}"


def summarize_revision_file(rf: RevisionFile) -> str:
    """Count the entries of each FileStatus, e.g. ``3 modified, 1 new``."""
    counts: dict[FileStatus, int] = {}
    for status in rf.statuses:
        counts[status] = counts.get(status, 0) + 1
    if not counts:
        return "no changes"
    return ", ".join(f"{count} {status.name.lower()}" for status, count in counts.items())

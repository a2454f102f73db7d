"""Decoder for the bulk commit log stream.

The stream is the output of::

    git log --date-order --no-color --log-size --parents --boundary -z
            --pretty=format:GIT_LOG_FORMAT --all

Records are separated by NUL bytes. Each record is an optional
``log size <N>`` line followed by::

    <mark><sha>X<parent> <parent>...
    <committer name><<committer email>>
    <author name><<author email>>
    <author timestamp>
    <subject>
    <body, possibly several lines>

where ``<mark>`` is ``-`` for a boundary commit and ``<`` or ``>``
otherwise.
"""

import logging
import re
from typing import Optional

from revcache.models import CommitInfo

logger = logging.getLogger(__name__)


GIT_LOG_FORMAT = "%m%HX%P%n%cn<%ce>%n%an<%ae>%n%at%n%s%n%b"

GIT_LOG_ARGS = [
    "log",
    "--date-order",
    "--no-color",
    "--log-size",
    "--parents",
    "--boundary",
    "-z",
    f"--pretty=format:{GIT_LOG_FORMAT}",
    "--all",
]

_HEADER_RE = re.compile(r"^(?P<mark>[<>\-^=+])(?P<sha>[0-9a-f]{40})X(?P<parents>(?:[0-9a-f]{40}(?: |$))*)$")
_LOG_SIZE_RE = re.compile(r"^log size \d+$")

# header, committer, author, timestamp, subject
_MIN_FIELDS = 5


def parse_commit_record(record: str, row: int) -> Optional[CommitInfo]:
    """Parse one log record.

    Args:
        record: The text between two NUL separators.
        row: Position of the commit in the log, starting at 1.

    Returns:
        The decoded CommitInfo, or None if the record is malformed.
    """
    lines = record.lstrip("\n").split("\n")
    if lines and _LOG_SIZE_RE.match(lines[0]):
        lines = lines[1:]

    if len(lines) < _MIN_FIELDS:
        return None

    header = _HEADER_RE.match(lines[0])
    if not header:
        return None

    try:
        date = int(lines[3])
    except ValueError:
        return None

    return CommitInfo(
        sha=header.group("sha"),
        parents=header.group("parents").split(),
        committer=lines[1],
        author=lines[2],
        date=date,
        short_log=lines[4],
        long_log="\n".join(lines[5:]).strip("\n"),
        boundary=header.group("mark") == "-",
        row=row,
    )


def decode_commit_stream(stream: bytes) -> list[CommitInfo]:
    """Split a NUL separated log stream into commits.

    Decoding stops at the first malformed record; the commits decoded
    before it are returned.

    Args:
        stream: Raw stdout of the git log command in GIT_LOG_ARGS.

    Returns:
        Decoded commits in stream order.
    """
    commits: list[CommitInfo] = []
    if not stream:
        return commits

    for row, raw in enumerate(stream.rstrip(b"\0").split(b"\0"), start=1):
        commit = parse_commit_record(raw.decode("utf-8", errors="replace"), row)
        if commit is None:
            logger.warning("Stopped decoding log stream at malformed record %d", row)
            break
        commits.append(commit)

    return commits

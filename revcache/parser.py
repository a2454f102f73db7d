"""Parser for git raw diff output.

Reads the output of ``git diff-tree -r -m`` and ``git diff-index`` (no
``--patch``) and builds a RevisionFile.

Contains:
- parse_revision_file: Parse one raw diff blob into a new RevisionFile
- parse_diff_format: Parse a raw diff blob into an existing RevisionFile
- parse_diff_line: Parse a single change line
- set_ext_status: Expand a rename or copy line into its entries

A single parent change line looks like::

    :100644 100644 <40 hex sha> <40 hex sha> M<TAB>path

so the status letter and the tab before the path sit at fixed offsets.
Renames and copies carry a similarity score after the letter, which
moves the tab, and are parsed by splitting instead::

    :100644 100644 <sha> <sha> R090<TAB>old/path<TAB>new/path

Combined merge lines (``git diff-tree -c``) start with one colon per
parent and have no rename information.
"""

import logging
import re
from typing import Optional

from revcache.loader import FileNamesLoader
from revcache.models import FileStatus, RevisionFile, StatusFlag, status_from_code
from revcache.names import NameTable

logger = logging.getLogger(__name__)


MODE_WIDTH = 6
SHA_WIDTH = 40

# ":" then "<mode> <mode> <sha> <sha> ", each field followed by one space
STATUS_OFFSET = 1 + 2 * (MODE_WIDTH + 1) + 2 * (SHA_WIDTH + 1)
PATH_TAB_OFFSET = STATUS_OFFSET + 1

_EXT_STATUS_RE = re.compile(r"^(?P<kind>[RC])(?P<score>\d+)$")


def parse_revision_file(raw: str, names: NameTable) -> RevisionFile:
    """Parse raw diff output into a new RevisionFile.

    Args:
        raw: Output of git diff-tree or git diff-index in raw format.
        names: The name table of the repository session.

    Returns:
        The parsed RevisionFile, with its paths flushed.
    """
    rf = RevisionFile(names)
    with FileNamesLoader(names) as loader:
        parse_diff_format(rf, raw, loader)
    return rf


def parse_diff_format(rf: RevisionFile, raw: str, loader: FileNamesLoader) -> None:
    """Parse raw diff output, appending entries to rf.

    Lines starting with ':' are change lines. Any other non-blank line
    (the commit sha that ``-m`` prints before each parent section)
    advances the parent number recorded on the following entries.

    The caller owns loader and must flush it.
    """
    par_num = 1
    for line in raw.split("\n"):
        if not line:
            continue
        if line[0] == ":":
            parse_diff_line(rf, line, par_num, loader)
        else:
            par_num += 1


def parse_diff_line(rf: RevisionFile, line: str, par_num: int, loader: FileNamesLoader) -> None:
    """Parse one change line into rf.

    Args:
        rf: The RevisionFile being built.
        line: A line starting with ':'.
        par_num: Parent number the line was computed against.
        loader: The loader bound to rf.
    """
    if len(line) > 1 and line[1] == ":":
        # Combined merge: only the path is usable, show it as modified
        _append_entry(rf, loader, line.rsplit("\t", 1)[-1], FileStatus.MODIFIED, StatusFlag.NONE, par_num)
        return

    if len(line) > PATH_TAB_OFFSET and line[PATH_TAB_OFFSET] == "\t":
        kind, flags = status_from_code(line[STATUS_OFFSET])
        _append_entry(rf, loader, line[PATH_TAB_OFFSET + 1:], kind, flags, par_num)
        return

    set_ext_status(rf, line[STATUS_OFFSET:], par_num, loader)


def set_ext_status(rf: RevisionFile, row_status: str, par_num: int, loader: FileNamesLoader) -> None:
    """Record a rename or copy.

    row_status is ``<R|C><score>\\t<orig>\\t<dest>``. The destination is
    added as NEW and, for a rename, the origin as DELETED. Both entries
    carry ``"<orig> --> <dest> (<score>%)"`` as extended status. Lines
    that do not match this shape are dropped.
    """
    fields = [f for f in row_status.split("\t") if f]
    if len(fields) != 3:
        logger.debug("Dropping malformed diff line: %r", row_status)
        return

    token, orig, dest = fields
    match = _EXT_STATUS_RE.match(token)
    if not match:
        logger.debug("Dropping diff line with unknown status %r", token)
        return

    ext_status = f"{orig} --> {dest} ({int(match.group('score'))}%)"

    _append_entry(rf, loader, dest, FileStatus.NEW, StatusFlag.NONE, par_num, ext_status)
    if match.group("kind") == "R":
        _append_entry(rf, loader, orig, FileStatus.DELETED, StatusFlag.NONE, par_num, ext_status)
    rf.only_modified = False


def _append_entry(
    rf: RevisionFile,
    loader: FileNamesLoader,
    name: str,
    kind: FileStatus,
    flags: StatusFlag,
    par_num: int,
    ext_status: Optional[str] = None,
) -> None:
    if not name:
        return
    loader.append(rf, name)
    rf.add_status(kind, par_num, flags, ext_status)

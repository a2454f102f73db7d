"""Batched path loading for RevisionFile.

A FileNamesLoader collects the interned indices of every path appended
to one RevisionFile and writes them into the target's packed storage in
a single block. Switching to another target flushes the current batch
first. A batch that is never flushed is lost, so callers use the loader
as a context manager or call flush() themselves.

Usage:
    with FileNamesLoader(names) as loader:
        loader.append(rf, "src/main.py")
"""

from typing import Optional

from revcache.models import RevisionFile
from revcache.names import NameTable


class FileNamesLoader:
    """Collects interned path indices for the RevisionFile being built."""

    def __init__(self, names: NameTable) -> None:
        self.names = names
        self.target: Optional[RevisionFile] = None
        self._dirs: list[int] = []
        self._files: list[int] = []

    def begin_entries(self, target: RevisionFile) -> "FileNamesLoader":
        """Bind the loader to target, flushing any other bound target."""
        if self.target is not target:
            self.flush()
            self.target = target
        return self

    def append(self, target: RevisionFile, name: str) -> None:
        """Intern name and buffer its indices for target.

        Empty names are ignored.
        """
        self.begin_entries(target)
        pair = self.names.intern(name)
        if pair is None:
            return
        self._dirs.append(pair[0])
        self._files.append(pair[1])

    def flush(self) -> None:
        """Write the buffered indices into the bound target and unbind.

        Indices already stored in the target are kept in front of the new
        ones. Safe to call any number of times.
        """
        if self.target is None:
            return
        stored = self.target.paths_idx
        n = len(stored) // 2
        self.target.paths_idx = stored[:n] + tuple(self._dirs) + stored[n:] + tuple(self._files)
        self._dirs = []
        self._files = []
        self.target = None

    def __enter__(self) -> "FileNamesLoader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.flush()

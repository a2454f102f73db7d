"""Path name interning for revcache.

Every path seen while parsing is split into a directory part and a
basename part. Each distinct string is stored once in an append-only
table and parsed records keep only the integer positions.

Contains:
- split_path: Split a path into its (directory, basename) keys
- NameTable: Directory and file name tables for one repository session
"""

from typing import Optional


def split_path(path: str) -> tuple[str, str]:
    """Split a path at its last slash.

    The directory key keeps the trailing slash, so the root directory is
    the empty string and ``dir + name`` always rebuilds the original path.

    Args:
        path: A repository relative path such as ``src/app/main.py``.

    Returns:
        Tuple of (directory, basename), e.g. ``("src/app/", "main.py")``.
    """
    idx = path.rfind("/") + 1
    return path[:idx], path[idx:]


class NameTable:
    """Append-only directory and basename tables.

    One instance is owned by a repository session and shared by every
    parse made in it. Indices stay valid until clear() is called on a
    repository reload.
    """

    def __init__(self) -> None:
        self.dir_names: list[str] = []
        self.file_names: list[str] = []
        self.dir_index: dict[str, int] = {}
        self.file_index: dict[str, int] = {}

    def intern(self, path: str) -> Optional[tuple[int, int]]:
        """Intern a path and return its (dir_idx, file_idx) pair.

        Args:
            path: The path to intern.

        Returns:
            The index pair, or None for an empty path (nothing is stored).
        """
        if not path:
            return None

        directory, name = split_path(path)

        dir_idx = self.dir_index.get(directory)
        if dir_idx is None:
            dir_idx = len(self.dir_names)
            self.dir_index[directory] = dir_idx
            self.dir_names.append(directory)

        file_idx = self.file_index.get(name)
        if file_idx is None:
            file_idx = len(self.file_names)
            self.file_index[name] = file_idx
            self.file_names.append(name)

        return dir_idx, file_idx

    def path(self, dir_idx: int, file_idx: int) -> str:
        """Rebuild the full path for an index pair."""
        return self.dir_names[dir_idx] + self.file_names[file_idx]

    def clear(self) -> None:
        """Drop every interned name. Only valid on a full repository reload."""
        self.dir_names.clear()
        self.file_names.clear()
        self.dir_index.clear()
        self.file_index.clear()

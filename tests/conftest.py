"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from revcache.names import NameTable


OLD_SHA = "1" * 40
NEW_SHA = "2" * 40


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def names():
    """A fresh name table."""
    return NameTable()


@pytest.fixture
def raw_line():
    """Build a single parent raw diff line as printed by git diff-tree."""

    def _build(status: str, *paths: str, old_mode: str = "100644", new_mode: str = "100644") -> str:
        return f":{old_mode} {new_mode} {OLD_SHA} {NEW_SHA} {status}\t" + "\t".join(paths)

    return _build


@pytest.fixture
def combined_line():
    """Build a combined merge raw diff line for a two parent merge."""

    def _build(status: str, path: str) -> str:
        return f"::100644 100644 100644 {OLD_SHA} {OLD_SHA} {NEW_SHA} {status}\t{path}"

    return _build


@pytest.fixture
def commit_record():
    """Build one record of the NUL separated log stream."""

    def _build(
        sha: str,
        parents: list[str] = (),
        subject: str = "Subject",
        body: str = "",
        mark: str = ">",
        timestamp: str = "1700000000",
    ) -> str:
        text = (
            f"{mark}{sha}X{' '.join(parents)}\n"
            f"Committer Name<committer@example.com>\n"
            f"Author Name<author@example.com>\n"
            f"{timestamp}\n"
            f"{subject}\n"
            f"{body}"
        )
        return f"log size {len(text)}\n{text}"

    return _build


@pytest.fixture
def sample_diff_tree(raw_line):
    """Raw diff-tree output of a commit touching four files."""
    return "\n".join(
        [
            raw_line("M", "README.md"),
            raw_line("A", "src/app/main.py", old_mode="000000"),
            raw_line("D", "src/app/legacy.py", new_mode="000000"),
            raw_line("R090", "src/old.txt", "src/new.txt"),
        ]
    ) + "\n"

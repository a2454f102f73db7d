"""Tests for revcache.formatters module."""

from revcache.formatters import (
    format_commit,
    format_revision_file,
    format_status,
    summarize_revision_file,
)
from revcache.models import CommitInfo, StatusFlag
from revcache.parser import parse_revision_file


class TestFormatStatus:
    """Tests for format_status function."""

    def test_plain(self, names, raw_line):
        """Test a status without flags."""
        rf = parse_revision_file(raw_line("A", "a.py"), names)
        assert format_status(rf, 0) == "A"

    def test_flags(self, names, raw_line):
        """Test that flags are appended to the letter."""
        rf = parse_revision_file(raw_line("U", "a.py"), names)
        rf.append_flags(0, StatusFlag.IN_INDEX)
        assert format_status(rf, 0) == "MCI"


class TestFormatRevisionFile:
    """Tests for format_revision_file function."""

    def test_one_line_per_entry(self, names, sample_diff_tree):
        """Test rendering every entry."""
        rf = parse_revision_file(sample_diff_tree, names)

        lines = format_revision_file(rf)

        assert len(lines) == rf.count()
        assert lines[0].startswith("M")
        assert lines[0].endswith("README.md")
        assert "src/old.txt --> src/new.txt (90%)" in lines[3]

    def test_show_parent(self, names, raw_line):
        """Test the parent column."""
        rf = parse_revision_file(raw_line("M", "a.py"), names)
        assert "[parent 1]" in format_revision_file(rf, show_parent=True)[0]


class TestSummarize:
    """Tests for summarize_revision_file function."""

    def test_counts(self, names, sample_diff_tree):
        """Test counting by status."""
        rf = parse_revision_file(sample_diff_tree, names)
        summary = summarize_revision_file(rf)
        assert "1 modified" in summary
        assert "2 deleted" in summary
        assert "1 new" in summary

    def test_empty(self, names):
        """Test an empty RevisionFile."""
        assert summarize_revision_file(parse_revision_file("", names)) == "no changes"


class TestFormatCommit:
    """Tests for format_commit function."""

    def test_contains_fields(self):
        """Test the short sha, author and subject."""
        commit = CommitInfo(sha="abcdef0123" + "0" * 30, author="Ann<ann@example.com>", date=0, short_log="Fix bug")
        line = format_commit(commit)
        assert "abcdef01" in line
        assert "Fix bug" in line
        assert line.startswith("*")

    def test_boundary(self):
        """Test the boundary marker."""
        commit = CommitInfo(sha="a" * 40, boundary=True)
        assert format_commit(commit).startswith("-")

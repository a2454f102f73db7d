"""Tests for revcache.log_stream module."""

from revcache.log_stream import (
    GIT_LOG_ARGS,
    GIT_LOG_FORMAT,
    decode_commit_stream,
    parse_commit_record,
)


SHA_A = "a" * 40
SHA_B = "b" * 40
SHA_C = "c" * 40
SHA_D = "d" * 40


def _stream(*records: str) -> bytes:
    return "\0".join(records).encode()


class TestLogArgs:
    """Tests for the git log invocation."""

    def test_format_in_args(self):
        """Test that the pretty format uses GIT_LOG_FORMAT."""
        assert f"--pretty=format:{GIT_LOG_FORMAT}" in GIT_LOG_ARGS
        assert "-z" in GIT_LOG_ARGS
        assert "--all" in GIT_LOG_ARGS


class TestParseCommitRecord:
    """Tests for parse_commit_record function."""

    def test_full_record(self, commit_record):
        """Test decoding every field."""
        record = commit_record(SHA_A, [SHA_B, SHA_C], subject="Merge branch", body="Line one\nLine two\n")

        commit = parse_commit_record(record, 4)

        assert commit.sha == SHA_A
        assert commit.parents == [SHA_B, SHA_C]
        assert commit.committer == "Committer Name<committer@example.com>"
        assert commit.author == "Author Name<author@example.com>"
        assert commit.date == 1700000000
        assert commit.short_log == "Merge branch"
        assert commit.long_log == "Line one\nLine two"
        assert commit.row == 4
        assert commit.boundary is False

    def test_root_commit(self, commit_record):
        """Test a commit without parents."""
        commit = parse_commit_record(commit_record(SHA_A), 1)
        assert commit.parents == []
        assert commit.long_log == ""

    def test_boundary_mark(self, commit_record):
        """Test that '-' marks a boundary commit."""
        commit = parse_commit_record(commit_record(SHA_A, [SHA_B], mark="-"), 1)
        assert commit.boundary is True

    def test_without_log_size_line(self, commit_record):
        """Test that the log size line is optional."""
        record = commit_record(SHA_A).split("\n", 1)[1]
        assert parse_commit_record(record, 1).sha == SHA_A

    def test_bad_sha(self, commit_record):
        """Test that a malformed header is rejected."""
        assert parse_commit_record(commit_record("xyz"), 1) is None

    def test_bad_timestamp(self, commit_record):
        """Test that a non numeric timestamp is rejected."""
        assert parse_commit_record(commit_record(SHA_A, timestamp="yesterday"), 1) is None

    def test_too_few_lines(self):
        """Test that a truncated record is rejected."""
        assert parse_commit_record(f">{SHA_A}X\nName<mail>", 1) is None

    def test_empty_record(self):
        """Test that an empty record is rejected."""
        assert parse_commit_record("", 1) is None


class TestDecodeCommitStream:
    """Tests for decode_commit_stream function."""

    def test_keeps_order(self, commit_record):
        """Test that three records decode in order."""
        stream = _stream(
            commit_record(SHA_A, [SHA_B]),
            commit_record(SHA_B, [SHA_C]),
            commit_record(SHA_C),
        )

        commits = decode_commit_stream(stream)

        assert [c.sha for c in commits] == [SHA_A, SHA_B, SHA_C]
        assert [c.row for c in commits] == [1, 2, 3]

    def test_stops_at_malformed_record(self, commit_record):
        """Test that a malformed fourth record truncates the batch."""
        stream = _stream(
            commit_record(SHA_A, [SHA_B]),
            commit_record(SHA_B, [SHA_C]),
            commit_record(SHA_C),
            "not a commit",
            commit_record(SHA_D),
        )

        commits = decode_commit_stream(stream)

        assert [c.sha for c in commits] == [SHA_A, SHA_B, SHA_C]

    def test_trailing_separator(self, commit_record):
        """Test that a trailing NUL does not count as a record."""
        stream = _stream(commit_record(SHA_A), commit_record(SHA_B)) + b"\0"
        assert len(decode_commit_stream(stream)) == 2

    def test_empty_stream(self):
        """Test that no output gives no commits."""
        assert decode_commit_stream(b"") == []

    def test_non_utf8_body(self, commit_record):
        """Test that undecodable bytes do not stop decoding."""
        stream = commit_record(SHA_A, body="caf").encode() + b"\xe9\n"
        commits = decode_commit_stream(stream)
        assert len(commits) == 1
        assert commits[0].long_log.startswith("caf")

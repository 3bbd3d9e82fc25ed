"""Tests for ggflow.git.diff module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from ggflow.git.diff import DiffCode, DiffRecord, diff_status, parse_diff_records
from ggflow.git.pathspec import Pathspec
from ggflow.lib.errors import StatusQueryError


class TestParseDiffRecords:
    """Test parsing of --name-status -z output."""

    def test_simple_records(self):
        """Should parse one record per code and path pair."""
        fields = iter([b"M", b"a.txt", b"A", b"b.txt", b"D", b"c.txt", b"T", b"d"])
        records = list(parse_diff_records(fields))
        assert records == [
            DiffRecord(DiffCode.MODIFIED, "a.txt"),
            DiffRecord(DiffCode.ADDED, "b.txt"),
            DiffRecord(DiffCode.DELETED, "c.txt"),
            DiffRecord(DiffCode.CHANGED_MODE, "d"),
        ]

    def test_rename_reports_destination(self):
        """A rename should report the destination path only."""
        records = list(parse_diff_records(iter([b"R100", b"old.txt", b"new.txt"])))
        assert records == [DiffRecord(DiffCode.RENAMED, "new.txt")]

    def test_invalid_code_raises(self):
        """An unknown status letter should raise StatusQueryError."""
        with pytest.raises(StatusQueryError, match="invalid code"):
            list(parse_diff_records(iter([b"Q", b"a.txt"])))

    def test_extra_status_characters_raise(self):
        """A plain code followed by extra characters should be rejected."""
        with pytest.raises(StatusQueryError):
            list(parse_diff_records(iter([b"M1", b"a.txt"])))

    def test_missing_path_raises(self):
        """A code with no following path should raise StatusQueryError."""
        with pytest.raises(StatusQueryError, match="unexpected EOF"):
            list(parse_diff_records(iter([b"M"])))


class TestDiffStatus:
    """Test diff_status command construction and behavior."""

    @patch("ggflow.git.diff.start_git")
    def test_args(self, mock_start):
        """Should run diff --name-status with renames disabled and pathspecs after '--'."""
        diff_status(Path("/repo"), "abc123", [Pathspec.top("a.txt")], disable_renames=True)
        args = mock_start.call_args[0][0]
        assert args == ["diff", "--name-status", "-z", "--no-renames", "abc123", "--", ":(top,literal)a.txt"]

    def test_rejects_option_like_revision(self):
        """A revision starting with '-' should be refused."""
        with pytest.raises(ValueError):
            diff_status(Path("/repo"), "--output=/tmp/x")

    def test_against_head(self, committed_repo):
        """Should report a modified file against HEAD in a real repository."""
        (committed_repo / "foo.txt").write_text("changed\n")
        with diff_status(committed_repo, "HEAD", disable_renames=True) as records:
            found = list(records)
        assert found == [DiffRecord(DiffCode.MODIFIED, "foo.txt")]

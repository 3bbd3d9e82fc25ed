"""Tests for ggflow.git runner and error reporting."""

from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest

from ggflow.git.runner import (
    GitResult,
    check_output,
    format_command,
    one_line,
    run_git,
    run_git_interactive,
    start_git,
)
from ggflow.lib.errors import GitError, StatusQueryError, git_subcommand


class TestGitResult:
    """Test GitResult dataclass."""

    def test_success_when_returncode_zero(self):
        """Exit status 0 should count as success."""
        result = GitResult(args=["status"], returncode=0, stdout="ok", stderr="")
        assert result.success is True

    def test_failure_when_returncode_nonzero(self):
        """A non-zero exit status should count as failure."""
        result = GitResult(args=["status"], returncode=1, stdout="", stderr="error")
        assert result.success is False

    def test_check_raises_git_error(self):
        """check() should raise GitError carrying the stderr text."""
        result = GitResult(args=["commit", "-m", "x"], returncode=1, stdout="", stderr="nothing to commit\n")
        with pytest.raises(GitError) as exc_info:
            result.check()
        assert str(exc_info.value) == "git commit: exit status 1\nnothing to commit"
        assert exc_info.value.returncode == 1


class TestRunGit:
    """Test run_git function."""

    @patch("ggflow.git.runner.subprocess.run")
    def test_returns_result_on_success(self, mock_run):
        """Should return captured output in a GitResult."""
        mock_run.return_value = MagicMock(
            returncode=0,
            stdout="output",
            stderr="",
        )
        result = run_git(["status"], Path("/tmp"))
        assert result.success
        assert result.stdout == "output"
        mock_run.assert_called_once()

    @patch("ggflow.git.runner.subprocess.run")
    def test_passes_cwd_with_C_flag(self, mock_run):
        """Should point git at the directory with -C."""
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        run_git(["status", "--porcelain"], Path("/my/repo"))
        call_args = mock_run.call_args[0][0]
        assert call_args == ["git", "-C", "/my/repo", "status", "--porcelain"]

    @patch("ggflow.git.runner.subprocess.run")
    def test_logs_invocation_at_debug(self, mock_run, caplog):
        """Should log the quoted command line at debug level."""
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        with caplog.at_level("DEBUG", logger="ggflow.git"):
            run_git(["commit", "--message=two words"], Path("/r"))
        assert 'exec: git -C /r commit "--message=two words"' in caplog.text


class TestHelpers:
    """Test check_output, one_line and run_git_interactive."""

    @patch("ggflow.git.runner.run_git")
    def test_check_output_raises(self, mock_run):
        """check_output should raise GitError on failure."""
        mock_run.return_value = GitResult(args=["log"], returncode=128, stdout="", stderr="fatal: bad")
        with pytest.raises(GitError, match="git log: exit status 128"):
            check_output(["log"], Path("/tmp"))

    @patch("ggflow.git.runner.run_git")
    def test_one_line_strips_newline(self, mock_run):
        """one_line should strip the trailing newline."""
        mock_run.return_value = GitResult(args=["rev-parse"], returncode=0, stdout="/repo\n", stderr="")
        assert one_line(["rev-parse", "--show-toplevel"], Path("/tmp")) == "/repo"

    @patch("ggflow.git.runner.run_git")
    def test_one_line_rejects_multiple_lines(self, mock_run):
        """one_line should raise when git prints more than one line."""
        mock_run.return_value = GitResult(args=["remote"], returncode=0, stdout="a\nb\n", stderr="")
        with pytest.raises(GitError, match="expected one line"):
            one_line(["remote"], Path("/tmp"))

    @patch("ggflow.git.runner.subprocess.run")
    def test_interactive_raises_on_failure(self, mock_run):
        """run_git_interactive should raise GitError on failure."""
        mock_run.return_value = MagicMock(returncode=1)
        with pytest.raises(GitError, match="git commit: exit status 1"):
            run_git_interactive(["commit"], Path("/tmp"))

    def test_format_command_quotes_spaces(self):
        """Arguments with spaces should be quoted."""
        assert format_command(["git", "commit", "-m", "a b"]) == 'git commit -m "a b"'


class TestGitSubcommand:
    """Test git_subcommand, used in error messages."""

    def test_plain(self):
        """Should return the first argument as the subcommand."""
        assert git_subcommand(["status", "--porcelain"]) == "status"

    def test_skips_config_option(self):
        """Should skip '-c key=value' before the subcommand."""
        assert git_subcommand(["-c", "status.renames=false", "status"]) == "status"

    def test_skips_leading_flags(self):
        """Should skip global flags before the subcommand."""
        assert git_subcommand(["--no-pager", "branch"]) == "branch"

    def test_empty(self):
        """Should return an empty string for no arguments."""
        assert git_subcommand([]) == ""


class TestGitProcess:
    """Run GitProcess against a real git binary."""

    def test_reads_fields(self, committed_repo):
        """Should split NUL-terminated output into fields."""
        with start_git(["ls-files", "-z"], committed_repo) as proc:
            fields = list(proc.fields())
            proc.wait()
        assert fields == [b"foo.txt"]
        assert proc.returncode == 0

    def test_reads_lines(self, committed_repo):
        """Should yield output lines without newlines."""
        with start_git(["log", "--format=%s"], committed_repo) as proc:
            lines = list(proc.lines())
            proc.wait()
        assert lines == ["first"]

    def test_wait_raises_with_stderr(self, tmp_path, git_env):
        """wait() should raise GitError with git's stderr."""
        with start_git(["rev-parse", "--verify", "HEAD"], tmp_path) as proc:
            with pytest.raises(GitError) as exc_info:
                proc.wait()
        assert exc_info.value.returncode != 0
        assert "not a git repository" in exc_info.value.stderr

    def test_truncated_output_raises(self, committed_repo):
        """A final field with no terminator should raise StatusQueryError."""
        with start_git(["log", "--format=%s"], committed_repo) as proc:
            with pytest.raises(StatusQueryError, match="unexpected EOF"):
                list(proc.fields())

    def test_close_is_idempotent(self, committed_repo):
        """Closing twice should be harmless."""
        proc = start_git(["log"], committed_repo)
        proc.close()
        proc.close()
        assert proc.closed

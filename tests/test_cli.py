"""Tests for ggflow.cli entrypoint."""

import logging

import pytest

from ggflow.cli import build_parser, configure_logging, main


class TestParser:
    """Test argument parsing."""

    def test_aliases(self):
        """Command aliases should dispatch to the same handler."""
        parser = build_parser()
        assert parser.parse_args(["ci", "-m", "x"]).func == parser.parse_args(["commit"]).func
        assert parser.parse_args(["rm", "a"]).func == parser.parse_args(["remove", "a"]).func
        assert parser.parse_args(["pr"]).func == parser.parse_args(["requestpull"]).func
        for alias in ("up", "checkout", "co"):
            assert parser.parse_args([alias]).func == parser.parse_args(["update"]).func
        assert parser.parse_args(["id"]).func == parser.parse_args(["identify"]).func

    def test_defaults(self):
        """revert should default to HEAD with backups on."""
        args = build_parser().parse_args(["revert", "a.txt"])
        assert args.rev == "HEAD"
        assert args.all is False
        assert args.no_backup is False
        assert args.files == ["a.txt"]

    def test_cat_and_identify_default_to_head(self):
        """cat and identify should default to HEAD; update takes an optional revision."""
        parser = build_parser()
        assert parser.parse_args(["cat", "a.txt"]).rev == "HEAD"
        assert parser.parse_args(["identify"]).rev == "HEAD"
        args = parser.parse_args(["update", "-m"])
        assert args.merge is True
        assert args.revision is None

    def test_pull_tags_default_on(self):
        """pull should fetch tags unless --no-tags is given."""
        parser = build_parser()
        assert parser.parse_args(["pull"]).tags is True
        assert parser.parse_args(["pull", "--no-tags"]).tags is False

    def test_bad_flag_exits_with_usage_code(self, capsys):
        """An unknown flag should exit with the usage code."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["commit", "--bogus"])
        assert exc_info.value.code == 64
        assert "unrecognized arguments" in capsys.readouterr().err

    def test_command_required(self):
        """Running with no command should exit with the usage code."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 64


class TestMain:
    """Test main() error handling and exit codes."""

    def test_success(self, committed_repo, monkeypatch, capsys):
        """Should return 0 when the command succeeds."""
        monkeypatch.chdir(committed_repo)
        assert main(["status"]) == 0

    def test_usage_error_exit_code(self, committed_repo, monkeypatch, capsys):
        """UsageError should map to exit code 64 with an ERROR line."""
        monkeypatch.chdir(committed_repo)
        assert main(["revert"]) == 64
        assert capsys.readouterr().err == "ERROR: no arguments given.  Use --all to revert entire repository.\n"

    def test_policy_violation_exit_code(self, committed_repo, monkeypatch, capsys):
        """PolicyViolation should map to exit code 1."""
        monkeypatch.chdir(committed_repo)
        assert main(["commit", "-m", "x"]) == 1
        assert capsys.readouterr().err == "ERROR: nothing changed\n"

    def test_outside_repository(self, tmp_path, git_env, monkeypatch, capsys):
        """Running outside a repository should report the git failure."""
        monkeypatch.chdir(tmp_path)
        assert main(["status"]) == 1
        assert capsys.readouterr().err.startswith("ERROR: git rev-parse: exit status")

    def test_invalid_config(self, committed_repo, git_env, monkeypatch, capsys):
        """Invalid GG_* settings should fail before the command runs."""
        monkeypatch.chdir(committed_repo)
        monkeypatch.setenv("GG_SHOW_GIT", "sometimes")
        assert main(["status"]) == 1
        assert "invalid configuration in environment" in capsys.readouterr().err


class TestConfigureLogging:
    """Test configure_logging function."""

    @pytest.fixture(autouse=True)
    def restore_git_logger(self):
        logger = logging.getLogger("ggflow.git")
        level = logger.level
        yield
        logger.setLevel(level)

    def test_show_git_enables_debug(self):
        """show_git should turn on debug logging for git invocations."""
        configure_logging(show_git=True)
        assert logging.getLogger("ggflow.git").level == logging.DEBUG

    def test_quiet_by_default(self):
        """git invocations should not be logged by default."""
        configure_logging()
        assert logging.getLogger("ggflow.git").level == logging.NOTSET

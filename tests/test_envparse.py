"""Tests for ggflow.lib.envparse module."""

import pytest

from ggflow.lib.envparse import load_env, parse_bool, parse_env


class TestParseEnv:
    """Test parse_env function."""

    def test_basic(self):
        """Should parse KEY=value lines."""
        assert parse_env("A=1\nB=two\n") == {"A": "1", "B": "two"}

    def test_comments_and_blank_lines(self):
        """Comments and blank lines should be skipped."""
        assert parse_env("# comment\n\nA=1\n") == {"A": "1"}

    def test_quotes_stripped(self):
        """Surrounding quotes should be removed from values."""
        assert parse_env("A=\"x y\"\nB='z'\n") == {"A": "x y", "B": "z"}

    def test_export_prefix(self):
        """A leading 'export' should be ignored."""
        assert parse_env("export A=1\n") == {"A": "1"}

    def test_missing_equals(self):
        """A line without '=' should raise with its line number."""
        with pytest.raises(ValueError, match="cfg:1: Invalid syntax"):
            parse_env("JUSTAKEY\n", "cfg")

    def test_invalid_key(self):
        """Lowercase keys should be rejected."""
        with pytest.raises(ValueError, match="Invalid key 'lower'"):
            parse_env("lower=1\n")

    @pytest.mark.parametrize("value", ["`id`", "$(id)", "${HOME}", "a;b", "a && b", "a | b"])
    def test_forbidden_patterns(self, value):
        """Shell substitutions and command separators in values should be rejected."""
        with pytest.raises(ValueError, match="Forbidden pattern"):
            parse_env(f"A={value}\n")


class TestLoadEnv:
    """Test load_env function."""

    def test_missing_file(self, tmp_path):
        """Should raise FileNotFoundError for a missing file."""
        with pytest.raises(FileNotFoundError):
            load_env(tmp_path / "nope.env")

    def test_reports_path_in_errors(self, tmp_path):
        """Parse errors should name the file and line."""
        path = tmp_path / "bad.env"
        path.write_text("A=1\noops\n")
        with pytest.raises(ValueError, match=r"bad\.env:2"):
            load_env(path)


class TestParseBool:
    """Test parse_bool function."""

    @pytest.mark.parametrize("value", ["1", "true", "True", "yes", "ON"])
    def test_true(self, value):
        """Truthy spellings should parse as True."""
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", ""])
    def test_false(self, value):
        """Falsy spellings should parse as False."""
        assert parse_bool(value) is False

    def test_invalid(self):
        """Anything else should raise ValueError."""
        with pytest.raises(ValueError):
            parse_bool("maybe")

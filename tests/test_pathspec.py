"""Tests for ggflow.git.pathspec module."""

import os
from pathlib import Path

import pytest

from ggflow.git.pathspec import (
    REPO_TOP,
    Pathspec,
    PathspecKind,
    eval_symlinks_sloppy,
    require_in_repo,
    resolve,
    resolve_all,
    to_filesystem_path,
)
from ggflow.lib.errors import OutsideRepositoryError, PathResolutionError


@pytest.fixture
def top(tmp_path):
    """A directory standing in for the top of a working copy."""
    path = tmp_path / "repo"
    (path / "sub").mkdir(parents=True)
    (path / "sub" / "a.txt").write_text("a\n")
    return Path(os.path.realpath(path))


class TestPathspec:
    """Test Pathspec rendering."""

    def test_literal_renders_with_literal_magic(self):
        """A literal pathspec should render with the literal magic prefix."""
        assert str(Pathspec.literal("/abs/a*.txt")) == ":(literal)/abs/a*.txt"

    def test_top_renders_with_top_magic(self):
        """A top-anchored pathspec should render with top and literal magic."""
        assert str(Pathspec.top("sub/a.txt")) == ":(top,literal)sub/a.txt"

    def test_repo_top(self):
        """REPO_TOP should be top-anchored with an empty path."""
        assert REPO_TOP.is_repo_top
        assert REPO_TOP.in_repo
        assert str(REPO_TOP) == ":(top,literal)"

    def test_literal_is_not_in_repo(self):
        """A literal pathspec should not count as inside the repository."""
        spec = Pathspec.literal("/elsewhere")
        assert spec.kind is PathspecKind.LITERAL
        assert not spec.in_repo
        assert not spec.is_repo_top


class TestEvalSymlinksSloppy:
    """Test eval_symlinks_sloppy function."""

    def test_root_is_unchanged(self):
        """The filesystem root should come back as is."""
        assert eval_symlinks_sloppy("/") == "/"

    def test_plain_path_is_cleaned(self, top):
        """'..' components should be collapsed."""
        assert eval_symlinks_sloppy(str(top / "sub" / ".." / "sub" / "a.txt")) == str(top / "sub" / "a.txt")

    def test_final_symlink_is_not_followed(self, top):
        """A symlink in the last component should be left alone."""
        os.symlink("a.txt", top / "sub" / "link")
        assert eval_symlinks_sloppy(str(top / "sub" / "link")) == str(top / "sub" / "link")

    def test_directory_symlink_is_followed(self, top):
        """A symlinked parent directory should be resolved."""
        os.symlink("sub", top / "alias")
        assert eval_symlinks_sloppy(str(top / "alias" / "a.txt")) == str(top / "sub" / "a.txt")

    def test_missing_file_keeps_name(self, top):
        """A file that doesn't exist should keep its name."""
        assert eval_symlinks_sloppy(str(top / "sub" / "gone.txt")) == str(top / "sub" / "gone.txt")

    def test_missing_directories_are_reappended(self, top):
        """Missing directories should be appended to the deepest existing parent."""
        os.symlink("sub", top / "alias")
        result = eval_symlinks_sloppy(str(top / "alias" / "x" / "y" / "z.txt"))
        assert result == str(top / "sub" / "x" / "y" / "z.txt")

    def test_file_used_as_directory_raises(self, top):
        """Using a regular file as a directory should raise OSError."""
        with pytest.raises(OSError):
            eval_symlinks_sloppy(str(top / "sub" / "a.txt" / "b" / "c.txt"))


class TestResolve:
    """Test resolve function."""

    def test_relative_path_in_subdirectory(self, top):
        """Relative arguments should be joined to the working directory."""
        assert resolve(top / "sub", top, "a.txt") == Pathspec.top("sub/a.txt")

    def test_relative_path_from_top(self, top):
        """A relative argument at the top should anchor as is."""
        assert resolve(top, top, "sub/a.txt") == Pathspec.top("sub/a.txt")

    def test_dot_at_top_is_repo_top(self, top):
        """'.' at the top should resolve to REPO_TOP."""
        assert resolve(top, top, ".") == REPO_TOP

    def test_dotdot_to_top_is_repo_top(self, top):
        """'..' from a subdirectory should resolve to REPO_TOP."""
        assert resolve(top / "sub", top, "..") == REPO_TOP

    def test_equivalent_spellings_resolve_equal(self, top):
        """Different spellings of one path should resolve to equal pathspecs."""
        assert resolve(top, top, "sub/../sub/a.txt") == resolve(top, top, "sub/a.txt")

    def test_absolute_path_in_repo(self, top):
        """An absolute path inside the repository should be top-anchored."""
        assert resolve(top / "sub", top, str(top / "sub" / "a.txt")) == Pathspec.top("sub/a.txt")

    def test_path_outside_repo_is_absolute_literal(self, top, tmp_path):
        """A path outside the repository should become an absolute literal."""
        outside = os.path.realpath(tmp_path)
        spec = resolve(top, top, "..")
        assert spec == Pathspec.literal(outside)
        assert not spec.in_repo

    def test_sibling_with_common_prefix_is_outside(self, top, tmp_path):
        """A sibling directory sharing a name prefix should not count as inside."""
        sibling = tmp_path / "repo2"
        sibling.mkdir()
        spec = resolve(top, top, str(sibling))
        assert spec.kind is PathspecKind.LITERAL

    def test_missing_file_still_resolves(self, top):
        """A deleted file should still resolve."""
        assert resolve(top, top, "sub/deleted.txt") == Pathspec.top("sub/deleted.txt")

    def test_symlinked_working_dir(self, top, tmp_path):
        """A symlinked working directory should resolve through the link."""
        os.symlink(top / "sub", tmp_path / "shortcut")
        assert resolve(tmp_path / "shortcut", top, "a.txt") == Pathspec.top("sub/a.txt")

    def test_symlink_leaf_stays_in_repo(self, top):
        """A symlink inside the repository should not be followed out of it."""
        os.symlink("/", top / "sub" / "root-link")
        assert resolve(top, top, "sub/root-link") == Pathspec.top("sub/root-link")

    def test_missing_working_dir_raises(self, top):
        """A missing working directory should raise PathResolutionError."""
        with pytest.raises(PathResolutionError, match="find current directory"):
            resolve(top / "nope", top, "a.txt")

    def test_unresolvable_argument_raises(self, top):
        """An argument whose location can't be determined should raise OutsideRepositoryError."""
        with pytest.raises(OutsideRepositoryError) as exc_info:
            resolve(top, top, "sub/a.txt/inner/x.txt")
        assert exc_info.value.argument == "sub/a.txt/inner/x.txt"

    def test_resolve_all_keeps_order(self, top):
        """resolve_all should return pathspecs in argument order."""
        specs = resolve_all(top, top, ["sub/a.txt", "."])
        assert specs == [Pathspec.top("sub/a.txt"), REPO_TOP]


class TestRequireInRepo:
    """Test require_in_repo function."""

    def test_passes_through_top_anchored(self):
        """A top-anchored pathspec should be returned unchanged."""
        spec = Pathspec.top("a.txt")
        assert require_in_repo("a.txt", spec) is spec

    def test_rejects_literal(self):
        """A path outside the working copy should raise OutsideRepositoryError."""
        with pytest.raises(OutsideRepositoryError, match="outside the working copy"):
            require_in_repo("../x", Pathspec.literal("/x"))


class TestToFilesystemPath:
    """Test to_filesystem_path function."""

    def test_top_anchored(self, top):
        """A top-anchored pathspec should map under the repository root."""
        assert to_filesystem_path(top, Pathspec.top("sub/a.txt")) == top / "sub" / "a.txt"

    def test_repo_top(self, top):
        """REPO_TOP should map to the repository root."""
        assert to_filesystem_path(top, REPO_TOP) == top

    def test_literal(self, top):
        """A literal pathspec should map to its own path."""
        assert to_filesystem_path(top, Pathspec.literal("/etc/hosts")) == Path("/etc/hosts")

"""Git revision and repository lookups."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from ggflow.git.pathspec import Pathspec
from ggflow.git.runner import check_output, one_line, run_git, start_git
from ggflow.lib.errors import GitError, UsageError

SHA_PATTERN = re.compile(r"^[0-9a-f]{40}([0-9a-f]{24})?$")


@dataclass(frozen=True)
class Rev:
    """A resolved revision: the commit and, if the revision named one, the full ref."""
    commit: str
    ref: str = ""

    @property
    def branch(self) -> str:
        """Branch name if ref is a local branch, else empty."""
        prefix = "refs/heads/"
        return self.ref[len(prefix):] if self.ref.startswith(prefix) else ""


def _validate_rev(rev: str) -> None:
    if not rev:
        raise ValueError("revision is empty")
    if rev.startswith("-"):
        raise ValueError(f"revision {rev!r} cannot start with '-'")


def require_rev(rev: str) -> str:
    """Return a user-supplied revision, or raise UsageError if it could be read as an option."""
    try:
        _validate_rev(rev)
    except ValueError as e:
        raise UsageError(str(e)) from None
    return rev


def work_tree(cwd: Path) -> Path:
    """Absolute, symlink-free path of the top of the working copy containing cwd."""
    top = one_line(["rev-parse", "--show-toplevel"], cwd)
    return Path(os.path.realpath(top))


def parse_rev(repo: Path, refspec: str) -> Rev:
    """
    Resolve a revision to a commit.

    Raises:
        GitError: if the revision does not name a commit (including HEAD in
            a repository with no commits)
    """
    try:
        _validate_rev(refspec)
    except ValueError as e:
        raise GitError([], 0, message=f"parse revision: {e}") from None
    args = ["rev-parse", "-q", "--verify", "--revs-only", refspec + "^{commit}"]
    result = run_git(args, repo)
    commit = result.stdout.strip()
    if not result.success or not SHA_PATTERN.match(commit):
        raise GitError(args, result.returncode, result.stderr,
                       message=f"parse revision {refspec!r}: unknown revision")
    ref = run_git(["rev-parse", "-q", "--verify", "--revs-only", "--symbolic-full-name", refspec], repo)
    return Rev(commit=commit, ref=ref.stdout.strip() if ref.success else "")


def is_merging(repo: Path) -> bool:
    """Report whether the index has a pending merge commit."""
    result = run_git(["rev-parse", "-q", "--verify", "MERGE_HEAD"], repo)
    if result.success:
        return True
    if result.returncode == 1:
        return False
    result.check()
    return False


def is_ancestor(repo: Path, rev1: str, rev2: str) -> bool:
    """Report whether rev1 is an ancestor of (or the same commit as) rev2."""
    _validate_rev(rev1)
    _validate_rev(rev2)
    result = run_git(["merge-base", "--is-ancestor", rev1, rev2], repo)
    if result.returncode == 1:
        return False
    result.check()
    return True


def list_tree(repo: Path, rev: str, pathspecs: list[Pathspec] | None = None) -> set[str]:
    """
    List the files present at a revision, optionally filtered by pathspecs.

    Returns slash-separated paths relative to the top of the repository.
    """
    _validate_rev(rev)
    args = ["ls-tree", "-z", "-r", "--name-only"]
    if pathspecs:
        args += ["--full-name", rev, "--"] + [str(p) for p in pathspecs]
    else:
        args += ["--full-tree", rev]
    with start_git(args, repo) as proc:
        paths = {os.fsdecode(f) for f in proc.fields()}
        proc.wait()
    return paths


def config_value(repo: Path, name: str) -> str:
    """Value of a git config key, or empty if unset."""
    result = run_git(["config", "--get", name], repo)
    if result.returncode == 1:
        return ""
    result.check()
    return result.stdout.strip()


def log_messages(repo: Path, rev_range: str) -> list[str]:
    """Full commit messages in a range, oldest first, following first parents."""
    _validate_rev(rev_range)
    out = check_output(
        ["log", "-z", "--reverse", "--first-parent", "--max-parents=1", "--format=%B", rev_range],
        repo,
    )
    return [m for m in out.split("\0") if m.strip()]


def cat_file(repo: Path, rev: str, path: str) -> str | None:
    """Content of path at rev, or None if it doesn't exist there."""
    _validate_rev(rev)
    result = run_git(["cat-file", "blob", f"{rev}:{path}"], repo)
    if not result.success:
        return None
    return result.stdout


def write_blob(repo: Path, rev: str, path: str, out: BinaryIO) -> None:
    """Copy the content of path at rev to a binary stream."""
    _validate_rev(rev)
    with start_git(["cat-file", "blob", f"{rev}:{path}"], repo) as proc:
        for chunk in proc.chunks():
            out.write(chunk)
        proc.wait()

"""Pathspecs and file argument resolution.

A Pathspec is either a literal path (matched exactly, relative to the
directory git runs in, or absolute) or a top-anchored literal path
(relative to the top of the working copy). The magic prefix git needs is
only produced when the pathspec is rendered with str().
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ggflow.lib.constants import LITERAL_MAGIC, TOP_LITERAL_MAGIC
from ggflow.lib.errors import OutsideRepositoryError, PathResolutionError


class PathspecKind(Enum):
    LITERAL = "literal"
    TOP_ANCHORED = "top"


@dataclass(frozen=True)
class Pathspec:
    """A resolved reference to one file or directory."""
    kind: PathspecKind
    value: str

    @classmethod
    def literal(cls, path: str) -> "Pathspec":
        return cls(PathspecKind.LITERAL, path)

    @classmethod
    def top(cls, path: str) -> "Pathspec":
        """Top-anchored literal pathspec for a slash-separated repository path."""
        return cls(PathspecKind.TOP_ANCHORED, path)

    @property
    def is_repo_top(self) -> bool:
        """True for the pathspec that names the whole working copy."""
        return self.kind is PathspecKind.TOP_ANCHORED and self.value == ""

    @property
    def in_repo(self) -> bool:
        return self.kind is PathspecKind.TOP_ANCHORED

    def __str__(self) -> str:
        if self.kind is PathspecKind.TOP_ANCHORED:
            return TOP_LITERAL_MAGIC + self.value
        return LITERAL_MAGIC + self.value


REPO_TOP = Pathspec.top("")


def eval_symlinks_sloppy(path: str) -> str:
    """
    Resolve symlinks in every directory of path, but not the final element.

    The final element may not exist (a deleted file), and neither may some
    of its parent directories. Walks up from the parent until an ancestor
    resolves, then re-appends the unresolved suffix. The path is cleaned
    first, so "a/../a/b" and "a/b" resolve identically.

    Raises:
        OSError: if resolution fails for any reason other than a missing path
            (permission denied, symlink loop, a file used as a directory)
    """
    path = os.path.normpath(path)
    parent, leaf = os.path.split(path)
    if not leaf:
        # Filesystem root.
        return path
    suffix = [leaf]
    current = parent
    while True:
        try:
            resolved = os.path.realpath(current, strict=True)
        except FileNotFoundError:
            up, name = os.path.split(current)
            if not name:
                return path
            suffix.append(name)
            current = up
            continue
        return os.path.join(resolved, *reversed(suffix))


def _real_dir(path: Path, what: str) -> str:
    try:
        return os.path.realpath(path, strict=True)
    except OSError as e:
        raise PathResolutionError(str(path), f"find {what}: {e.strerror or e}") from None


def resolve(working_dir: Path, repo_root: Path, argument: str) -> Pathspec:
    """
    Resolve one user-supplied file argument into a Pathspec.

    Relative arguments are joined against working_dir. Paths under
    repo_root become top-anchored; repo_root itself becomes REPO_TOP.
    Anything else becomes an absolute literal pathspec.

    Raises:
        PathResolutionError: if working_dir or repo_root can't be resolved
        OutsideRepositoryError: if symlink resolution of the argument fails
            for a reason other than the path not existing
    """
    wd = _real_dir(working_dir, "current directory")
    top = _real_dir(repo_root, "top directory")
    path = argument if os.path.isabs(argument) else os.path.join(wd, argument)
    try:
        path = eval_symlinks_sloppy(path)
    except OSError as e:
        raise OutsideRepositoryError(argument, e.strerror or str(e)) from None

    if path == top:
        return REPO_TOP
    prefix = top.rstrip(os.sep) + os.sep
    if path.startswith(prefix):
        rel = path[len(prefix):]
        return Pathspec.top(rel.replace(os.sep, "/"))
    return Pathspec.literal(path)


def resolve_all(working_dir: Path, repo_root: Path, arguments: list[str]) -> list[Pathspec]:
    """Resolve every argument, in order. See resolve()."""
    return [resolve(working_dir, repo_root, a) for a in arguments]


def require_in_repo(argument: str, spec: Pathspec) -> Pathspec:
    """Return spec, or raise OutsideRepositoryError if it is not in the working copy."""
    if not spec.in_repo:
        raise OutsideRepositoryError(argument)
    return spec


def to_filesystem_path(repo_root: Path, spec: Pathspec) -> Path:
    """Absolute filesystem path a pathspec refers to."""
    if spec.in_repo:
        return Path(repo_root) / Path(*spec.value.split("/")) if spec.value else Path(repo_root)
    return Path(spec.value)

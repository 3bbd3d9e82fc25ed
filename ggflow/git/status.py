"""Git status operations.

Parses `git status --porcelain -z` (short format, v1) into ChangeRecords.
Every valid two-letter code maps to exactly one ChangeKind; an invalid
code or a truncated record fails the whole query.

Short format codes (X = index, Y = work tree), from git-status(1):

    X          Y     Meaning
    -------------------------------------------------
             [AMDTRC] not updated
    [MTARC]  [ MTD]  updated in index
    D                deleted from index
    D           D    unmerged, both deleted
    A           U    unmerged, added by us
    U           D    unmerged, deleted by them
    U           A    unmerged, added by them
    D           U    unmerged, deleted by us
    A           A    unmerged, both added
    U           U    unmerged, both modified
    ?           ?    untracked
    !           !    ignored
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator

from ggflow.git.pathspec import Pathspec
from ggflow.git.runner import GitProcess, start_git
from ggflow.lib.errors import GitError, StatusQueryError

logger = logging.getLogger(__name__)


class ChangeKind(Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    COPIED = "copied"
    RENAMED = "renamed"
    MISSING = "missing"
    UNTRACKED = "untracked"
    UNMERGED = "unmerged"
    IGNORED = "ignored"
    CHANGED_MODE = "changed_mode"


UNMERGED_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})

VALID_CODES = frozenset(
    {"??", "!!", "D "}
    | {" " + y for y in "AMDTRC"}
    | {x + y for x in "MTARC" for y in " MTD"}
    | UNMERGED_CODES
)


def classify_code(code: str) -> ChangeKind:
    """
    Map a two-letter status code to its ChangeKind.

    Raises:
        ValueError: if code is not a valid short-format status code
    """
    if code not in VALID_CODES:
        raise ValueError(f"invalid status code {code!r}")
    x, y = code[0], code[1]
    if code == "??":
        return ChangeKind.UNTRACKED
    if code == "!!":
        return ChangeKind.IGNORED
    if code in UNMERGED_CODES:
        return ChangeKind.UNMERGED
    if y == "D":
        return ChangeKind.MISSING
    if x == "R" or y == "R":
        return ChangeKind.RENAMED
    if x == "C" or y == "C":
        return ChangeKind.COPIED
    if x == "A" or y == "A":
        return ChangeKind.ADDED
    if x == "D":
        return ChangeKind.REMOVED
    if x == "T" or y == "T":
        return ChangeKind.CHANGED_MODE
    return ChangeKind.MODIFIED


def has_from_path(code: str) -> bool:
    """Rename and copy records are followed by the path they came from."""
    return "R" in code or "C" in code


@dataclass(frozen=True)
class ChangeRecord:
    """One path reported by git status."""
    code: str
    path: str  # slash-separated, relative to the top of the working copy
    kind: ChangeKind
    previous_path: str | None = None
    staged: bool = False

    @property
    def pathspec(self) -> Pathspec:
        return Pathspec.top(self.path)

    @property
    def previous_pathspec(self) -> Pathspec | None:
        if self.previous_path is None:
            return None
        return Pathspec.top(self.previous_path)

    def __str__(self) -> str:
        if self.previous_path is not None:
            return f"{self.code} {self.previous_path} -> {self.path}"
        return f"{self.code} {self.path}"


def parse_status_records(fields: Iterator[bytes]) -> Iterator[ChangeRecord]:
    """
    Turn NUL-separated porcelain fields into ChangeRecords.

    Raises:
        StatusQueryError: on a malformed record or invalid code
    """
    for field in fields:
        if len(field) < 4:
            raise StatusQueryError(f"read status entry: unexpected EOF in {field!r}")
        if field[2:3] != b" ":
            raise StatusQueryError(f"read status entry: expected ' ', got {field[2:3]!r}")
        code = field[:2].decode("ascii", errors="replace")
        path = os.fsdecode(field[3:])
        previous = None
        if has_from_path(code):
            previous_field = next(fields, None)
            if previous_field is None:
                raise StatusQueryError("read status entry: unexpected EOF reading from")
            previous = os.fsdecode(previous_field)
        try:
            kind = classify_code(code)
        except ValueError as e:
            raise StatusQueryError(f"read status entry: {e}") from None
        staged = kind is not ChangeKind.UNMERGED and code[0] not in " ?!"
        yield ChangeRecord(code=code, path=path, kind=kind, previous_path=previous, staged=staged)


class StatusReader:
    """Lazy, one-pass sequence of ChangeRecords over a running `git status`.

    Use as a context manager so the git process is released on every exit
    path. Iterating to the end also checks git's exit status.
    """

    def __init__(self, proc: GitProcess):
        self._proc = proc
        self._started = False

    def __enter__(self) -> "StatusReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[ChangeRecord]:
        if self._started:
            raise RuntimeError("status records can only be read once")
        self._started = True
        return self._records()

    def _records(self) -> Iterator[ChangeRecord]:
        try:
            yield from parse_status_records(self._proc.fields())
            self._proc.wait()
        except StatusQueryError:
            raise
        except GitError as e:
            raise StatusQueryError(str(e), args=e.git_args, returncode=e.returncode, stderr=e.stderr) from None
        finally:
            self._proc.close()

    def close(self) -> None:
        self._proc.close()


def classify(
    repo_root: Path,
    pathspecs: list[Pathspec] | None = None,
    include_ignored: bool = False,
    disable_renames: bool = False,
) -> StatusReader:
    """
    Query working copy status, optionally restricted to pathspecs.

    Returns a StatusReader; the caller must iterate it or close it.
    """
    args = []
    if disable_renames:
        args += ["-c", "status.renames=false"]
    args += ["status", "--porcelain", "-z", "-unormal"]
    if include_ignored:
        args.append("--ignored")
    if pathspecs:
        args.append("--")
        args += [str(p) for p in pathspecs]
    return StatusReader(start_git(args, repo_root))


def read_status(repo_root: Path, pathspecs: list[Pathspec] | None = None, **kwargs) -> list[ChangeRecord]:
    """Fully read a status query into a list."""
    with classify(repo_root, pathspecs, **kwargs) as reader:
        return list(reader)

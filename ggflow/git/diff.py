"""Git diff operations."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator

from ggflow.git.pathspec import Pathspec
from ggflow.git.runner import GitProcess, start_git
from ggflow.lib.errors import GitError, StatusQueryError


class DiffCode(Enum):
    """Single-letter codes from `git diff --name-status`."""
    ADDED = "A"
    COPIED = "C"
    DELETED = "D"
    MODIFIED = "M"
    RENAMED = "R"
    CHANGED_MODE = "T"
    UNMERGED = "U"
    UNKNOWN = "X"
    BROKEN = "B"


@dataclass(frozen=True)
class DiffRecord:
    code: DiffCode
    path: str  # slash-separated, relative to the top of the working copy

    @property
    def pathspec(self) -> Pathspec:
        return Pathspec.top(self.path)


def parse_diff_records(fields: Iterator[bytes]) -> Iterator[DiffRecord]:
    """
    Turn `--name-status -z` fields into DiffRecords.

    Each record is a status field followed by a path field. Renames and
    copies carry a similarity score ("R100") and two paths; the destination
    is reported.
    """
    for status in fields:
        if not status:
            raise StatusQueryError("read diff entry: empty status")
        letter = chr(status[0])
        try:
            code = DiffCode(letter)
        except ValueError:
            raise StatusQueryError(f"read diff entry: invalid code {letter!r}") from None
        if code in (DiffCode.RENAMED, DiffCode.COPIED):
            if next(fields, None) is None:
                raise StatusQueryError("read diff entry: unexpected EOF")
        elif len(status) != 1:
            raise StatusQueryError(f"read diff entry: expected '\\x00', got {status[1:2]!r}")
        name = next(fields, None)
        if name is None:
            raise StatusQueryError("read diff entry: unexpected EOF")
        yield DiffRecord(code=code, path=os.fsdecode(name))


class DiffReader:
    """Lazy, one-pass sequence of DiffRecords. Close it on every path out."""

    def __init__(self, proc: GitProcess):
        self._proc = proc

    def __enter__(self) -> "DiffReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[DiffRecord]:
        try:
            yield from parse_diff_records(self._proc.fields())
            self._proc.wait()
        except StatusQueryError:
            raise
        except GitError as e:
            raise StatusQueryError(str(e), args=e.git_args, returncode=e.returncode, stderr=e.stderr) from None
        finally:
            self._proc.close()

    def close(self) -> None:
        self._proc.close()


def diff_status(
    repo_root: Path,
    commit1: str | None = None,
    pathspecs: list[Pathspec] | None = None,
    disable_renames: bool = False,
) -> DiffReader:
    """
    Compare the working tree with commit1 (or the index, if None).

    Returns a DiffReader; the caller must iterate it or close it.
    """
    if commit1 is not None and commit1.startswith("-"):
        raise ValueError(f"diff status: revision {commit1!r} cannot start with '-'")
    args = ["diff", "--name-status", "-z"]
    if disable_renames:
        args.append("--no-renames")
    if commit1 is not None:
        args.append(commit1)
    if pathspecs:
        args.append("--")
        args += [str(p) for p in pathspecs]
    return DiffReader(start_git(args, repo_root))

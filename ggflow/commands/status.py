"""
gg status - Show changed files in the working copy.
"""

from pathlib import Path

from ggflow.git.pathspec import resolve_all
from ggflow.git.revision import work_tree
from ggflow.git.status import ChangeKind, ChangeRecord, classify
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS

LETTERS = {
    ChangeKind.MODIFIED: "M",
    ChangeKind.ADDED: "A",
    ChangeKind.REMOVED: "R",
    ChangeKind.MISSING: "!",
    ChangeKind.UNTRACKED: "?",
    ChangeKind.IGNORED: "I",
    ChangeKind.UNMERGED: "U",
    ChangeKind.CHANGED_MODE: "T",
}


def format_record(record: ChangeRecord) -> list[str]:
    """Lines `gg status` prints for one record."""
    if record.kind is ChangeKind.COPIED:
        return [f"A {record.path}", f"  {record.previous_path}"]
    if record.kind is ChangeKind.RENAMED:
        return [f"A {record.path}", f"  {record.previous_path}", f"R {record.previous_path}"]
    return [f"{LETTERS[record.kind]} {record.path}"]


def cmd_status(args, cwd: Path, config: GGConfig) -> int:
    """Print one line per changed file, optionally limited to FILE arguments."""
    repo_root = work_tree(cwd)
    pathspecs = resolve_all(cwd, repo_root, args.files)
    with classify(repo_root, pathspecs, include_ignored=args.ignored) as records:
        for record in records:
            for line in format_record(record):
                print(line)
    return EXIT_SUCCESS

"""
gg remove - Remove files on the next commit.
"""

from pathlib import Path

from ggflow.git.commit import remove
from ggflow.git.pathspec import Pathspec, resolve_all
from ggflow.git.revision import work_tree
from ggflow.git.status import ChangeKind, classify
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import GGError, UsageError


def verify_present(repo_root: Path, pathspecs: list[Pathspec]) -> None:
    """Raise if any named file is already missing from the working tree."""
    named = {p.value for p in pathspecs if p.in_repo}
    with classify(repo_root) as records:
        for record in records:
            if record.kind is ChangeKind.MISSING and record.path in named:
                raise GGError(f"missing {record.path}")


def cmd_remove(args, cwd: Path, config: GGConfig) -> int:
    if not args.files:
        raise UsageError("must pass one or more files to remove")
    repo_root = work_tree(cwd)
    pathspecs = resolve_all(cwd, repo_root, args.files)
    if not args.after:
        verify_present(repo_root, pathspecs)
    remove(repo_root, pathspecs, force=args.force)
    return EXIT_SUCCESS

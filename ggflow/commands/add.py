"""
gg add - Add files on the next commit.

Also marks merge conflicts as resolved, like `git add`.
"""

from pathlib import Path

from ggflow.git.commit import add
from ggflow.git.pathspec import Pathspec, require_in_repo, resolve
from ggflow.git.revision import work_tree
from ggflow.git.status import ChangeKind, classify
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import UsageError


def split_unmerged(repo_root: Path, pathspecs: list[Pathspec]) -> tuple[list[Pathspec], list[Pathspec]]:
    """Partition pathspecs into (normal, unmerged) by asking git status."""
    with classify(repo_root, pathspecs) as records:
        unmerged_paths = {r.path for r in records if r.kind is ChangeKind.UNMERGED}
    normal = [p for p in pathspecs if p.value not in unmerged_paths]
    unmerged = [p for p in pathspecs if p.value in unmerged_paths]
    # Unmerged files inside a named directory still need a plain add.
    named = {p.value for p in unmerged}
    unmerged += [Pathspec.top(path) for path in sorted(unmerged_paths - named)]
    return normal, unmerged


def cmd_add(args, cwd: Path, config: GGConfig) -> int:
    if not args.files:
        raise UsageError("must pass one or more files to add")
    repo_root = work_tree(cwd)
    pathspecs = [require_in_repo(f, resolve(cwd, repo_root, f)) for f in args.files]
    normal, unmerged = split_unmerged(repo_root, pathspecs)
    if normal:
        add(repo_root, normal, intent_only=True)
    if unmerged:
        add(repo_root, unmerged)
    return EXIT_SUCCESS

"""
gg identify - Summarize the working copy or a revision.

Prints the commit hash, a "+" when the working copy has uncommitted
changes (only when identifying HEAD), then the branches and tags that
point at the commit.
"""

from pathlib import Path

from ggflow.git.branch import refs_pointing_at
from ggflow.git.revision import parse_rev, work_tree
from ggflow.git.status import ChangeKind, classify
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS, HEAD


def has_uncommitted_changes(repo_root: Path) -> bool:
    with classify(repo_root) as records:
        return any(r.kind not in (ChangeKind.UNTRACKED, ChangeKind.IGNORED) for r in records)


def cmd_identify(args, cwd: Path, config: GGConfig) -> int:
    repo_root = work_tree(cwd)
    rev = parse_rev(repo_root, args.rev)
    summary = rev.commit
    if args.rev in (HEAD, "@") and has_uncommitted_changes(repo_root):
        summary += "+"
    branches, tags = refs_pointing_at(repo_root, rev.commit)
    print(" ".join([summary] + branches + tags))
    return EXIT_SUCCESS

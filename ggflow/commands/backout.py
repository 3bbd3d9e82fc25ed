"""
gg backout - Apply the inverse of a commit.
"""

from pathlib import Path

from ggflow.git.commit import revert_commit
from ggflow.git.revision import parse_rev, work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import UsageError


def cmd_backout(args, cwd: Path, config: GGConfig) -> int:
    if bool(args.rev) == bool(args.revision):
        raise UsageError("must pass a single revision")
    repo_root = work_tree(cwd)
    target = parse_rev(repo_root, args.rev or args.revision)
    revert_commit(repo_root, target.commit, edit=args.edit, no_commit=args.no_commit)
    return EXIT_SUCCESS

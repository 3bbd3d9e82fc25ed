"""
gg update - Update the working copy, or switch to another revision.

With no revision, the current branch is fast-forwarded to its upstream.
"""

import logging
from pathlib import Path

from ggflow.git.branch import get_current_branch
from ggflow.git.commit import checkout_branch, checkout_rev, fast_forward, reset_branch_to_head
from ggflow.git.revision import is_ancestor, parse_rev, work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS, HEAD
from ggflow.lib.errors import GGError, UsageError

logger = logging.getLogger(__name__)

UPSTREAM = "@{upstream}"


def update_to_upstream(repo_root: Path, merge: bool) -> None:
    """
    Move the current branch forward to its upstream.

    Without merge this is a plain fast-forward, which git refuses if local
    changes would be overwritten. With merge, local changes are carried
    across: the working copy is checked out at the upstream with
    `--merge`, then the branch is moved to match.

    Raises:
        GGError: if no branch is checked out or the upstream has diverged
    """
    if not merge:
        fast_forward(repo_root)
        return
    branch = get_current_branch(repo_root)
    if not branch:
        raise GGError("can't update to upstream with no branch checked out; run 'gg update BRANCH'")
    head = parse_rev(repo_root, HEAD)
    if not is_ancestor(repo_root, head.commit, UPSTREAM):
        raise GGError("upstream has diverged; run 'gg merge' or 'gg rebase'")
    # Only safe because the upstream is known to descend from HEAD.
    checkout_rev(repo_root, UPSTREAM, merge=True)
    reset_branch_to_head(repo_root, branch)


def cmd_update(args, cwd: Path, config: GGConfig) -> int:
    if args.revision and args.rev:
        raise UsageError("can pass only one revision")
    repo_root = work_tree(cwd)
    target = args.rev or args.revision
    if not target:
        logger.info("updating to upstream")
        update_to_upstream(repo_root, args.merge)
        return EXIT_SUCCESS

    rev = parse_rev(repo_root, target)
    if rev.branch:
        logger.info(f"switching to branch {rev.branch}")
        checkout_branch(repo_root, rev.branch, merge=args.merge)
    else:
        logger.info(f"detaching at {rev.commit}")
        checkout_rev(repo_root, rev.commit, merge=args.merge)
    return EXIT_SUCCESS

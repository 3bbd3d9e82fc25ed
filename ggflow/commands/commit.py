"""
gg commit - Record changes in the working copy.

With no FILE arguments, every changed tracked file is committed (git's
staging area is not consulted). Unmerged files block the commit.
"""

import logging
from pathlib import Path

from ggflow.git.commit import commit
from ggflow.git.revision import is_merging, work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import UsageError
from ggflow.workflow.reconcile import select_for_commit

logger = logging.getLogger(__name__)


def cmd_commit(args, cwd: Path, config: GGConfig) -> int:
    repo_root = work_tree(cwd)
    merging = is_merging(repo_root)
    if merging and args.files:
        raise UsageError("can't commit specific files during a merge")

    selection = select_for_commit(cwd, repo_root, args.files, merging=merging, amend=args.amend)
    if selection.commit_all:
        logger.info("committing merge")
    else:
        logger.info(f"committing {len(selection.selected_files)} file(s)")
    commit(
        repo_root,
        list(selection.selected_files),
        all_tracked=selection.commit_all,
        amend=args.amend,
        message=args.message or "",
    )
    return EXIT_SUCCESS

"""
gg revert - Restore files to an earlier revision.

Locally modified files are saved as <name>.orig first unless backups
are turned off.
"""

import logging
from pathlib import Path

from ggflow.git.revision import work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.workflow.fsm import RevertSequence

logger = logging.getLogger(__name__)


def cmd_revert(args, cwd: Path, config: GGConfig) -> int:
    repo_root = work_tree(cwd)
    seq = RevertSequence(
        cwd,
        repo_root,
        args.files,
        target_revision=args.rev,
        revert_all=args.all,
        backups=config.revert_backups and not args.no_backup,
    )
    plan = seq.run()
    if plan.fallback_unstage:
        logger.info(f"unstaged {len(plan.pathspecs) or 'all'} path(s)")
    else:
        logger.info(f"reverted {len(plan.selected_files)} file(s) to {args.rev}")
    return EXIT_SUCCESS

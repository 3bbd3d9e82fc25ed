"""
gg merge - Merge another revision into the working copy.

The merge stops before committing; run `gg commit` once the result looks
right, or `gg merge --abort` to give up.
"""

import logging
from pathlib import Path

from ggflow.git.commit import abort_merge, merge
from ggflow.git.revision import require_rev, work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import UsageError

logger = logging.getLogger(__name__)

DEFAULT_MERGE_REV = "@{upstream}"


def cmd_merge(args, cwd: Path, config: GGConfig) -> int:
    if args.abort:
        if args.revision or args.rev:
            raise UsageError("cannot specify revision with --abort")
        abort_merge(work_tree(cwd))
        return EXIT_SUCCESS
    if args.revision and args.rev:
        raise UsageError("must pass at most one revision to merge")

    rev = require_rev(args.rev or args.revision or DEFAULT_MERGE_REV)
    repo_root = work_tree(cwd)
    logger.info(f"merging {rev}")
    merge(repo_root, rev)
    return EXIT_SUCCESS

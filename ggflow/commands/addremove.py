"""
gg addremove - Add all new files, delete all missing files.

With no FILE arguments the whole working copy is considered. A file named
explicitly is added even if it is ignored.
"""

import logging
from pathlib import Path

from ggflow.git.commit import add, remove
from ggflow.git.pathspec import Pathspec, require_in_repo, resolve
from ggflow.git.revision import work_tree
from ggflow.git.status import ChangeKind, classify
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS

logger = logging.getLogger(__name__)


def cmd_addremove(args, cwd: Path, config: GGConfig) -> int:
    repo_root = work_tree(cwd)
    pathspecs = [require_in_repo(f, resolve(cwd, repo_root, f)) for f in args.files]
    named = set(pathspecs)

    new: list[Pathspec] = []
    ignored: list[Pathspec] = []
    missing: list[Pathspec] = []
    with classify(repo_root, pathspecs, include_ignored=bool(pathspecs)) as records:
        for record in records:
            if record.kind is ChangeKind.UNTRACKED:
                # Untracked directories are reported as "dir/".
                new.append(Pathspec.top(record.path.rstrip("/")))
            elif record.kind is ChangeKind.IGNORED and record.pathspec in named:
                ignored.append(record.pathspec)
            elif record.kind is ChangeKind.MISSING:
                missing.append(record.pathspec)

    if new:
        add(repo_root, new, intent_only=True)
    if ignored:
        add(repo_root, ignored, intent_only=True, force=True)
    if missing:
        remove(repo_root, missing, cached=True)
    logger.info(f"added {len(new) + len(ignored)}, removed {len(missing)}")
    return EXIT_SUCCESS

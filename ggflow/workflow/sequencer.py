"""
Backup and mutation steps of `gg revert`.

Revert is several separate git calls, so it cannot be atomic. The order
is what keeps it recoverable: every locally modified file is renamed to
<name>.orig before anything overwrites it, and a failure while backing
up stops the revert before any destructive step runs. Backups already
made are left in place.
"""

import logging
import os
from pathlib import Path

from ggflow.git.commit import checkout_paths, remove, reset_paths
from ggflow.git.pathspec import Pathspec
from ggflow.git.status import ChangeKind, classify
from ggflow.lib.constants import BACKUP_SUFFIX
from ggflow.lib.errors import BackupError

logger = logging.getLogger(__name__)


def backup(repo_root: Path, modified: list[Pathspec]) -> int:
    """
    Rename modified files to <name>.orig.

    Only files with changes git doesn't already have in HEAD (per status)
    are backed up; anything else can be recovered from history.

    Returns:
        Number of files backed up

    Raises:
        StatusQueryError: if git status fails
        BackupError: if a rename fails; earlier renames are not undone
    """
    if not modified:
        return 0
    with classify(repo_root, modified, disable_renames=True) as records:
        names = [r.path for r in records if r.kind is not ChangeKind.MISSING]
    if not names:
        return 0

    backed_up: list[str] = []
    for name in names:
        path = os.path.join(repo_root, *name.split("/"))
        try:
            os.rename(path, path + BACKUP_SUFFIX)
        except OSError as e:
            if backed_up:
                logger.warning(f"Backup stopped at {name}; already saved: {', '.join(backed_up)}")
            raise BackupError(name, e, backed_up) from e
        backed_up.append(name)
        logger.info(f"saved {name}{BACKUP_SUFFIX}")
    return len(backed_up)


def mutate(
    repo_root: Path,
    adds: list[Pathspec],
    deletes: list[Pathspec],
    mods: list[Pathspec],
    chmods: list[Pathspec],
    target_revision: str,
) -> None:
    """
    Bring files back to target_revision.

    Added files are untracked but left on disk. Then modified, mode-changed
    and deleted files are checked out from the target in one call.
    """
    if adds:
        # --force only relaxes the index safety check; --cached never touches disk.
        remove(repo_root, adds, force=True, cached=True)
    restore = mods + chmods + deletes
    if restore:
        checkout_paths(repo_root, target_revision, restore)


def unstage(repo_root: Path, pathspecs: list[Pathspec]) -> None:
    """Unstage files; used when there is no commit to revert to."""
    reset_paths(repo_root, pathspecs)

"""
gg push - Update a remote ref with a local revision.

Unlike `git push`, the destination ref defaults to the source's own ref
name and a ref the remote does not have yet is only created with --create.
"""

import logging
from pathlib import Path

from ggflow.git.branch import branches_containing
from ggflow.git.remote import infer_push_remote, push, remote_has_ref
from ggflow.git.revision import Rev, parse_rev, work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import GGError

logger = logging.getLogger(__name__)


def source_ref(repo_root: Path, src: Rev) -> str:
    """The ref src names, or the only local branch containing it."""
    if src.ref:
        return src.ref
    possible = branches_containing(repo_root, src.commit)
    if len(possible) == 1:
        return possible[0]
    return ""


def destination_ref(dest: str | None, src_ref: str) -> str:
    """Full ref name to update: -d as given (or as a branch), else the source ref."""
    if not dest:
        if not src_ref:
            raise GGError("cannot infer destination (source is not a ref). Use -d to specify destination ref.")
        return src_ref
    if dest.startswith("refs/"):
        return dest
    return f"refs/heads/{dest}"


def cmd_push(args, cwd: Path, config: GGConfig) -> int:
    repo_root = work_tree(cwd)
    src = parse_rev(repo_root, args.rev)
    src_ref = source_ref(repo_root, src)
    branch = src_ref[len("refs/heads/"):] if src_ref.startswith("refs/heads/") else ""

    remote = args.destination or infer_push_remote(repo_root, branch, config.default_remote)
    dst_ref = destination_ref(args.dest, src_ref)
    if not args.create and not remote_has_ref(repo_root, remote, dst_ref):
        raise GGError(f"remote {remote} does not have ref {dst_ref}")

    logger.info(f"pushing {src.commit[:12]} to {remote} {dst_ref}")
    push(repo_root, remote, f"{src.commit}:{dst_ref}", force_with_lease=args.force, dry_run=args.dry_run)
    return EXIT_SUCCESS

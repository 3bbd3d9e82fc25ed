"""
gg pull - Fetch from a remote and optionally fast-forward to it.
"""

from pathlib import Path

from ggflow.git.branch import get_current_branch
from ggflow.git.remote import fetch, infer_pull_remote, infer_upstream_ref
from ggflow.git.revision import work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import GGError


def cmd_pull(args, cwd: Path, config: GGConfig) -> int:
    """
    Pull a ref from a remote.

    The source defaults to the current branch's remote, then the default
    remote. The ref defaults to the branch's merge ref, then the branch
    of the same name, then HEAD.
    """
    repo_root = work_tree(cwd)
    branch = get_current_branch(repo_root)
    remote = args.source or infer_pull_remote(repo_root, branch, config.default_remote)
    if args.ref:
        if args.ref.startswith("-") or args.ref.endswith(":"):
            raise GGError(f"invalid ref {args.ref!r}")
        ref = args.ref
    else:
        ref = infer_upstream_ref(repo_root, branch)
    fetch(repo_root, remote, ref + ":", tags=args.tags, update=args.update)
    return EXIT_SUCCESS

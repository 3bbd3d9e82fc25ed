"""
gg branch - List, create, or delete branches.

A new branch copies the upstream of the branch it starts from. Creating
branches without -r also switches HEAD to the first one named.
"""

from pathlib import Path

from ggflow.git.branch import (
    branch_exists,
    create_branch,
    delete_branches,
    get_branch_upstream,
    list_branches,
    set_branch_upstream,
    switch_head,
)
from ggflow.git.revision import parse_rev, work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS, HEAD
from ggflow.lib.errors import GGError, GitError, UsageError


def _delete(repo_root: Path, args) -> None:
    if not args.names:
        raise UsageError("must pass branch names to delete")
    if args.rev:
        raise UsageError("can't pass -r for delete")
    delete_branches(repo_root, args.names, force=args.force)


def _create(repo_root: Path, args) -> None:
    for name in args.names:
        if name.startswith("-"):
            raise GGError(f"invalid branch name {name!r}")
    target = args.rev or HEAD
    source = parse_rev(repo_root, target)
    upstream = get_branch_upstream(repo_root, source.branch) if source.branch else ""

    for name in args.names:
        # Moving an existing branch with -f keeps its own upstream.
        existed = bool(upstream) and args.force and branch_exists(repo_root, name)
        try:
            create_branch(repo_root, name, target, force=args.force)
            if upstream and not existed:
                set_branch_upstream(repo_root, name, upstream)
        except GitError as e:
            raise GGError(f"branch {name!r}: {e}") from e

    if not args.rev:
        switch_head(repo_root, args.names[0])


def cmd_branch(args, cwd: Path, config: GGConfig) -> int:
    repo_root = work_tree(cwd)
    if args.delete:
        _delete(repo_root, args)
    elif not args.names:
        if args.force:
            raise UsageError("can't pass -f without branch names")
        if args.rev:
            raise UsageError("can't pass -r without branch names")
        list_branches(repo_root)
    else:
        _create(repo_root, args)
    return EXIT_SUCCESS

"""
gg diff - Show changes to the working copy or between revisions.
"""

from pathlib import Path

from ggflow.git.pathspec import resolve_all
from ggflow.git.revision import parse_rev, require_rev, work_tree
from ggflow.git.runner import one_line, run_git_interactive
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS, HEAD
from ggflow.lib.errors import GitError, UsageError


def diff_base(repo_root: Path) -> str:
    """HEAD's commit, or the empty tree when there are no commits yet."""
    try:
        return parse_rev(repo_root, HEAD).commit
    except GitError:
        return one_line(["hash-object", "-t", "tree", "/dev/null"], repo_root)


def cmd_diff(args, cwd: Path, config: GGConfig) -> int:
    revs = args.rev or []
    if len(revs) > 2:
        raise UsageError("can only pass a revision flag at most twice")
    if revs and args.change:
        raise UsageError("can't pass both -r and -c")
    repo_root = work_tree(cwd)

    diff_args = ["diff"]
    diff_args.append("--stat" if args.stat else f"-U{args.context}")
    if args.ignore_space_change:
        diff_args.append("--ignore-space-change")
    if args.ignore_all_space:
        diff_args.append("--ignore-all-space")
    if args.change:
        change = require_rev(args.change)
        diff_args += [change + "^", change]
    elif revs:
        diff_args += [require_rev(r) for r in revs]
    else:
        diff_args.append(diff_base(repo_root))
    diff_args.append("--")
    diff_args += [str(p) for p in resolve_all(cwd, repo_root, args.files)]
    run_git_interactive(diff_args, repo_root)
    return EXIT_SUCCESS

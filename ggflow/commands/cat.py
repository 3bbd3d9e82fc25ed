"""
gg cat - Print files as they were at a revision (HEAD by default).
"""

import sys
from pathlib import Path

from ggflow.git.pathspec import require_in_repo, resolve
from ggflow.git.revision import list_tree, parse_rev, work_tree, write_blob
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS
from ggflow.lib.errors import PathResolutionError, UsageError


def cmd_cat(args, cwd: Path, config: GGConfig) -> int:
    if not args.files:
        raise UsageError("must pass one or more files to cat")
    repo_root = work_tree(cwd)
    rev = parse_rev(repo_root, args.rev)
    for argument in args.files:
        spec = require_in_repo(argument, resolve(cwd, repo_root, argument))
        if spec.value not in list_tree(repo_root, rev.commit, [spec]):
            raise PathResolutionError(argument, f"no such file at {args.rev}")
        write_blob(repo_root, rev.commit, spec.value, sys.stdout.buffer)
    sys.stdout.buffer.flush()
    return EXIT_SUCCESS

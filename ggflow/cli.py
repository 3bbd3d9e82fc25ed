#!/usr/bin/env python3
"""gg CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from ggflow.lib.config import load_config
from ggflow.lib.constants import EXIT_ERROR, EXIT_USAGE, HEAD
from ggflow.lib.errors import GGError, UsageError
from ggflow.commands import status as cmd_status_module
from ggflow.commands import add as cmd_add_module
from ggflow.commands import remove as cmd_remove_module
from ggflow.commands import commit as cmd_commit_module
from ggflow.commands import revert as cmd_revert_module
from ggflow.commands import backout as cmd_backout_module
from ggflow.commands import branch as cmd_branch_module
from ggflow.commands import pull as cmd_pull_module
from ggflow.commands import push as cmd_push_module
from ggflow.commands import requestpull as cmd_requestpull_module
from ggflow.commands import diff as cmd_diff_module
from ggflow.commands import merge as cmd_merge_module
from ggflow.commands import update as cmd_update_module
from ggflow.commands import addremove as cmd_addremove_module
from ggflow.commands import cat as cmd_cat_module
from ggflow.commands import identify as cmd_identify_module


class GGArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with EX_USAGE on bad arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def configure_logging(verbose: bool = False, show_git: bool = False) -> None:
    """Send log records to stderr. show_git echoes every git invocation."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )
    if show_git:
        logging.getLogger("ggflow.git").setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = GGArgumentParser(prog='gg', description='Git workflow front end')
    parser.add_argument('--show-git', action='store_true', help='Log git commands as they run')
    parser.add_argument('--verbose', '-v', action='store_true', help='Report progress')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # gg status
    p_status = subparsers.add_parser('status', aliases=['st'], help='Show changed files in the working copy')
    p_status.add_argument('files', nargs='*', metavar='FILE')
    p_status.add_argument('--ignored', action='store_true', help='Also show ignored files')
    p_status.set_defaults(func=cmd_status_module.cmd_status)

    # gg add
    p_add = subparsers.add_parser('add', help='Add files on the next commit')
    p_add.add_argument('files', nargs='*', metavar='FILE')
    p_add.set_defaults(func=cmd_add_module.cmd_add)

    # gg remove
    p_remove = subparsers.add_parser('remove', aliases=['rm'], help='Remove files on the next commit')
    p_remove.add_argument('files', nargs='*', metavar='FILE')
    p_remove.add_argument('--force', '-f', action='store_true', help='Forget added files, delete modified files')
    p_remove.add_argument('--after', action='store_true', help='Record delete for missing files')
    p_remove.set_defaults(func=cmd_remove_module.cmd_remove)

    # gg addremove
    p_addremove = subparsers.add_parser('addremove', help='Add all new files, delete all missing files')
    p_addremove.add_argument('files', nargs='*', metavar='FILE')
    p_addremove.set_defaults(func=cmd_addremove_module.cmd_addremove)

    # gg commit
    p_commit = subparsers.add_parser('commit', aliases=['ci'], help='Commit changes in the working copy')
    p_commit.add_argument('files', nargs='*', metavar='FILE')
    p_commit.add_argument('--amend', action='store_true', help='Replace the current commit')
    p_commit.add_argument('--message', '-m', help='Use text as commit message')
    p_commit.set_defaults(func=cmd_commit_module.cmd_commit)

    # gg revert
    p_revert = subparsers.add_parser('revert', help='Restore files to their checkout state')
    p_revert.add_argument('files', nargs='*', metavar='FILE')
    p_revert.add_argument('--all', action='store_true', help='Revert all changes')
    p_revert.add_argument('--no-backup', '-C', action='store_true', help='Do not save backup copies of files')
    p_revert.add_argument('--rev', '-r', default=HEAD, help='Revert to this revision')
    p_revert.set_defaults(func=cmd_revert_module.cmd_revert)

    # gg backout
    p_backout = subparsers.add_parser('backout', help='Apply the inverse of a commit')
    p_backout.add_argument('revision', nargs='?', metavar='REV')
    p_backout.add_argument('--rev', '-r', help='Revision to back out')
    p_backout.add_argument('--edit', '-e', dest='edit', action='store_true', default=True,
                           help='Edit the commit message (default)')
    p_backout.add_argument('--no-edit', dest='edit', action='store_false', help='Use the default commit message')
    p_backout.add_argument('--no-commit', '-n', action='store_true', help='Do not commit')
    p_backout.set_defaults(func=cmd_backout_module.cmd_backout)

    # gg branch
    p_branch = subparsers.add_parser('branch', help='List, create, or delete branches')
    p_branch.add_argument('names', nargs='*', metavar='NAME')
    p_branch.add_argument('--delete', '-d', action='store_true', help='Delete the given branches')
    p_branch.add_argument('--force', '-f', action='store_true', help='Force')
    p_branch.add_argument('--rev', '-r', help='Revision to place branches on')
    p_branch.set_defaults(func=cmd_branch_module.cmd_branch)

    # gg merge
    p_merge = subparsers.add_parser('merge', help='Merge another revision into the working copy')
    p_merge.add_argument('revision', nargs='?', metavar='REV')
    p_merge.add_argument('--rev', '-r', help='Revision to merge (default: upstream)')
    p_merge.add_argument('--abort', action='store_true', help='Abort the ongoing merge')
    p_merge.set_defaults(func=cmd_merge_module.cmd_merge)

    # gg update
    p_update = subparsers.add_parser('update', aliases=['up', 'checkout', 'co'],
                                     help='Update the working copy (or switch revisions)')
    p_update.add_argument('revision', nargs='?', metavar='REV')
    p_update.add_argument('--rev', '-r', help='Revision to update to')
    p_update.add_argument('--merge', '-m', action='store_true', help='Merge uncommitted changes')
    p_update.set_defaults(func=cmd_update_module.cmd_update)

    # gg pull
    p_pull = subparsers.add_parser('pull', help='Pull changes from a remote repository')
    p_pull.add_argument('source', nargs='?', metavar='SOURCE')
    p_pull.add_argument('--ref', '-r', help='Remote ref to pull')
    p_pull.add_argument('--tags', dest='tags', action='store_true', default=True, help='Pull all tags (default)')
    p_pull.add_argument('--no-tags', dest='tags', action='store_false', help='Do not pull tags')
    p_pull.add_argument('--update', '-u', action='store_true', help='Fast-forward to the pulled head')
    p_pull.set_defaults(func=cmd_pull_module.cmd_pull)

    # gg push
    p_push = subparsers.add_parser('push', help='Push changes to a remote repository')
    p_push.add_argument('destination', nargs='?', metavar='DST')
    p_push.add_argument('--rev', '-r', default=HEAD, help='Source revision')
    p_push.add_argument('--dest', '-d', help='Destination ref')
    p_push.add_argument('--create', action='store_true', help='Allow pushing a new ref')
    p_push.add_argument('--force', '-f', action='store_true', help='Overwrite the ref if it matches the remote-tracking branch')
    p_push.add_argument('--dry-run', '-n', action='store_true', help='Do everything except send the changes')
    p_push.set_defaults(func=cmd_push_module.cmd_push)

    # gg requestpull
    p_pr = subparsers.add_parser('requestpull', aliases=['pr'], help='Create a GitHub pull request')
    p_pr.add_argument('branch', nargs='?', metavar='BRANCH')
    p_pr.add_argument('--title', help='Pull request title')
    p_pr.add_argument('--body', help='Pull request description (requires --title)')
    p_pr.add_argument('--draft', action='store_true', help='Create the pull request as a draft')
    p_pr.add_argument('--reviewer', '-R', dest='reviewers', action='append', help='GitHub username of a reviewer')
    p_pr.add_argument('--no-maintainer-edits', dest='maintainer_edits', action='store_false',
                      help='Do not allow maintainers to edit the branch')
    p_pr.add_argument('--dry-run', '-n', action='store_true', help='Print the pull request instead of creating it')
    p_pr.set_defaults(func=cmd_requestpull_module.cmd_requestpull)

    # gg diff
    p_diff = subparsers.add_parser('diff', help='Diff the repository (or selected files)')
    p_diff.add_argument('files', nargs='*', metavar='FILE')
    p_diff.add_argument('--rev', '-r', action='append', help='Revision (may be given twice)')
    p_diff.add_argument('--change', '-c', help='Change made by a revision')
    p_diff.add_argument('--stat', action='store_true', help='Diffstat-style summary')
    p_diff.add_argument('-U', dest='context', type=int, default=3, help='Lines of context')
    p_diff.add_argument('--ignore-space-change', '-b', action='store_true')
    p_diff.add_argument('--ignore-all-space', '-w', action='store_true')
    p_diff.set_defaults(func=cmd_diff_module.cmd_diff)

    # gg cat
    p_cat = subparsers.add_parser('cat', help='Print files as of a revision')
    p_cat.add_argument('files', nargs='*', metavar='FILE')
    p_cat.add_argument('--rev', '-r', default=HEAD, help='Revision to print')
    p_cat.set_defaults(func=cmd_cat_module.cmd_cat)

    # gg identify
    p_identify = subparsers.add_parser('identify', aliases=['id'], help='Identify the working copy or a revision')
    p_identify.add_argument('--rev', '-r', default=HEAD, help='Revision to identify')
    p_identify.set_defaults(func=cmd_identify_module.cmd_identify)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config()
        configure_logging(verbose=args.verbose, show_git=args.show_git or config.show_git)
        return args.func(args, Path.cwd(), config)
    except UsageError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except GGError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())

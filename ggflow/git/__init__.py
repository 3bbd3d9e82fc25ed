"""Git operations for gg.

Every function runs the git binary; nothing here reads .git directly.

Return type conventions:
- Functions that mutate the repository return None and raise GitError on failure.
  Examples: add(), commit(), checkout_paths(), push()
- Functions returning bool answer a question and raise only if git itself fails.
- classify() and diff_status() return readers over a running git process;
  use them as context managers.
"""

from ggflow.git.runner import (
    GitResult,
    GitProcess,
    run_git,
    start_git,
    check_output,
    one_line,
    run_git_interactive,
)
from ggflow.git.pathspec import (
    Pathspec,
    PathspecKind,
    REPO_TOP,
    eval_symlinks_sloppy,
    resolve,
    resolve_all,
    require_in_repo,
    to_filesystem_path,
)
from ggflow.git.status import (
    ChangeKind,
    ChangeRecord,
    classify,
    classify_code,
    read_status,
)
from ggflow.git.diff import (
    DiffCode,
    DiffRecord,
    diff_status,
)
from ggflow.git.revision import (
    Rev,
    work_tree,
    parse_rev,
    is_merging,
    is_ancestor,
    list_tree,
    config_value,
    log_messages,
    cat_file,
    write_blob,
    require_rev,
)
from ggflow.git.branch import (
    get_current_branch,
    get_branch_upstream,
    branches_containing,
    branch_exists,
    refs_pointing_at,
    list_branches,
    create_branch,
    set_branch_upstream,
    delete_branches,
    switch_head,
)
from ggflow.git.commit import (
    commit,
    add,
    remove,
    checkout_paths,
    reset_paths,
    revert_commit,
    merge,
    abort_merge,
    fast_forward,
    checkout_branch,
    checkout_rev,
    reset_branch_to_head,
)
from ggflow.git.remote import (
    list_remotes,
    fetch,
    push,
    remote_has_ref,
    infer_push_remote,
    infer_pull_remote,
    infer_upstream_ref,
)

__all__ = [
    # runner
    "GitResult",
    "GitProcess",
    "run_git",
    "start_git",
    "check_output",
    "one_line",
    "run_git_interactive",
    # pathspec
    "Pathspec",
    "PathspecKind",
    "REPO_TOP",
    "eval_symlinks_sloppy",
    "resolve",
    "resolve_all",
    "require_in_repo",
    "to_filesystem_path",
    # status
    "ChangeKind",
    "ChangeRecord",
    "classify",
    "classify_code",
    "read_status",
    # diff
    "DiffCode",
    "DiffRecord",
    "diff_status",
    # revision
    "Rev",
    "work_tree",
    "parse_rev",
    "is_merging",
    "is_ancestor",
    "list_tree",
    "config_value",
    "log_messages",
    "cat_file",
    "write_blob",
    "require_rev",
    # branch
    "get_current_branch",
    "get_branch_upstream",
    "branches_containing",
    "branch_exists",
    "refs_pointing_at",
    "list_branches",
    "create_branch",
    "set_branch_upstream",
    "delete_branches",
    "switch_head",
    # commit
    "commit",
    "add",
    "remove",
    "checkout_paths",
    "reset_paths",
    "revert_commit",
    "merge",
    "abort_merge",
    "fast_forward",
    "checkout_branch",
    "checkout_rev",
    "reset_branch_to_head",
    # remote
    "list_remotes",
    "fetch",
    "push",
    "remote_has_ref",
    "infer_push_remote",
    "infer_pull_remote",
    "infer_upstream_ref",
]

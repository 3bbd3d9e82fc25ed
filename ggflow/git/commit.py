"""Git index and working tree mutations."""

from pathlib import Path

from ggflow.git.pathspec import Pathspec
from ggflow.git.runner import check_output, run_git_interactive


def _specs(pathspecs: list[Pathspec]) -> list[str]:
    return [str(p) for p in pathspecs]


def commit(
    repo_root: Path,
    pathspecs: list[Pathspec] | None = None,
    all_tracked: bool = False,
    amend: bool = False,
    message: str = "",
) -> None:
    """
    Create a commit from the top of the working copy.

    Either all_tracked (`-a`, used during a merge) or the given pathspecs
    select what is committed. Runs attached to the terminal so git can
    open the editor when no message is given.
    """
    args = ["commit", "--quiet"]
    if amend:
        args.append("--amend")
    if message:
        args.append(f"--message={message}")
    if all_tracked:
        args.append("-a")
    else:
        args.append("--")
        args += _specs(pathspecs or [])
    run_git_interactive(args, repo_root)


def add(repo_root: Path, pathspecs: list[Pathspec], intent_only: bool = False, force: bool = False) -> None:
    """Stage files. With intent_only, only record that they will be added (`-N`).

    force adds files even if they are ignored.
    """
    args = ["add"]
    if intent_only:
        args.append("-N")
    if force:
        args.append("--force")
    check_output(args + ["--"] + _specs(pathspecs), repo_root)


def remove(repo_root: Path, pathspecs: list[Pathspec], force: bool = False, cached: bool = False) -> None:
    """Remove files from the index, and from disk unless cached."""
    args = ["rm", "--quiet"]
    if force:
        args.append("--force")
    if cached:
        args.append("--cached")
    check_output(args + ["--"] + _specs(pathspecs), repo_root)


def checkout_paths(repo_root: Path, rev: str, pathspecs: list[Pathspec]) -> None:
    """Overwrite index and working tree entries with their content at rev."""
    check_output(["checkout", rev, "--"] + _specs(pathspecs), repo_root)


def reset_paths(repo_root: Path, pathspecs: list[Pathspec]) -> None:
    """Unstage paths, leaving the working tree alone."""
    check_output(["reset", "--quiet", "--"] + _specs(pathspecs), repo_root)


def revert_commit(repo_root: Path, commit_sha: str, edit: bool = True, no_commit: bool = False) -> None:
    """Apply the inverse of a commit (`git revert`)."""
    args = ["revert", "--edit" if edit else "--no-edit"]
    if no_commit:
        args.append("--no-commit")
    args.append(commit_sha)
    run_git_interactive(args, repo_root)


def merge(repo_root: Path, rev: str) -> None:
    """Merge rev into the working copy, stopping before the merge commit.

    Conflicts are left in the working copy for the user to resolve; git
    exits non-zero and GitError is raised.
    """
    run_git_interactive(["merge", "--no-commit", "--no-ff", rev], repo_root)


def abort_merge(repo_root: Path) -> None:
    check_output(["merge", "--abort"], repo_root)


def fast_forward(repo_root: Path) -> None:
    """Fast-forward the current branch to its upstream."""
    check_output(["merge", "--quiet", "--ff-only"], repo_root)


def checkout_branch(repo_root: Path, branch: str, merge: bool = False) -> None:
    """Switch to a branch. merge carries local changes across (`--merge`)."""
    args = ["checkout", "--quiet"]
    if merge:
        args.append("--merge")
    check_output(args + [branch, "--"], repo_root)


def checkout_rev(repo_root: Path, rev: str, merge: bool = False) -> None:
    """Detach HEAD at rev."""
    args = ["checkout", "--quiet", "--detach"]
    if merge:
        args.append("--merge")
    check_output(args + [rev, "--"], repo_root)


def reset_branch_to_head(repo_root: Path, branch: str) -> None:
    """Point branch at the current HEAD and check it out."""
    check_output(["checkout", "--quiet", "-B", branch], repo_root)

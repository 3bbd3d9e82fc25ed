"""Git remote operations."""

import re
from pathlib import Path

from ggflow.git.revision import config_value
from ggflow.git.runner import one_line, run_git_interactive, start_git
from ggflow.lib.errors import GGError, GitError

LS_REMOTE_LINE = re.compile(r"^[0-9a-f]{40}([0-9a-f]{24})?\t(.+)$")


def list_remotes(repo: Path) -> set[str]:
    """Names of the configured remotes."""
    with start_git(["remote"], repo) as proc:
        remotes = {line for line in proc.lines() if line}
        proc.wait()
    return remotes


def fetch(
    repo: Path,
    remote: str,
    refspec: str,
    tags: bool = True,
    update: bool = False,
) -> None:
    """Fetch refspec from remote. With update, `pull --ff-only` instead."""
    args = ["pull", "--ff-only"] if update else ["fetch"]
    if tags:
        args.append("--tags")
    args += ["--", remote, refspec]
    run_git_interactive(args, repo)


def push(
    repo: Path,
    remote: str,
    refspec: str,
    force_with_lease: bool = False,
    dry_run: bool = False,
) -> None:
    """Push refspec ("<commit>:<remote ref>") to remote."""
    args = ["push"]
    if force_with_lease:
        args.append("--force-with-lease")
    if dry_run:
        args.append("--dry-run")
    args += ["--", remote, refspec]
    run_git_interactive(args, repo)


def remote_has_ref(repo: Path, remote: str, ref: str) -> bool:
    """Check the remote (its push URL, if it is a named remote) for ref."""
    if remote in list_remotes(repo):
        remote = one_line(["remote", "get-url", "--push", "--", remote], repo)
    found = False
    with start_git(["ls-remote", "--quiet", remote, ref], repo) as proc:
        for line in proc.lines():
            m = LS_REMOTE_LINE.match(line)
            if not m:
                raise GitError(proc.args, 0, message="parse git ls-remote: line must start with SHA1")
            if m.group(2) == ref:
                found = True
        proc.wait()
    return found


def infer_push_remote(repo: Path, branch: str, default_remote: str = "origin") -> str:
    """
    Pick the remote to push to.

    First non-empty of branch.<b>.pushRemote, remote.pushDefault,
    branch.<b>.remote; otherwise default_remote if it exists.
    """
    if branch:
        r = config_value(repo, f"branch.{branch}.pushRemote")
        if r:
            return r
    r = config_value(repo, "remote.pushDefault")
    if r:
        return r
    if branch:
        r = config_value(repo, f"branch.{branch}.remote")
        if r:
            return r
    if default_remote not in list_remotes(repo):
        raise GGError(f'no destination given and no remote named "{default_remote}" found')
    return default_remote


def infer_pull_remote(repo: Path, branch: str, default_remote: str = "origin") -> str:
    """branch.<b>.remote if set, otherwise default_remote if it exists."""
    if branch:
        r = config_value(repo, f"branch.{branch}.remote")
        if r:
            return r
    if default_remote not in list_remotes(repo):
        raise GGError(f'no source given and no remote named "{default_remote}" found')
    return default_remote


def infer_upstream_ref(repo: Path, branch: str) -> str:
    """Remote ref to pull for branch: branch.<b>.merge, refs/heads/<b>, or HEAD."""
    if not branch:
        return "HEAD"
    merge = config_value(repo, f"branch.{branch}.merge")
    if merge:
        return merge
    return f"refs/heads/{branch}"


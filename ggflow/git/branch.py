"""Git branch operations."""

from pathlib import Path

from ggflow.git.runner import check_output, run_git, run_git_interactive
from ggflow.lib.constants import HEAD


def get_current_branch(repo: Path) -> str:
    """Name of the checked-out branch, or empty when HEAD is detached."""
    result = run_git(["symbolic-ref", "-q", "--short", HEAD], repo)
    if result.success:
        return result.stdout.strip()
    return ""


def get_branch_upstream(repo: Path, branch: str) -> str:
    """Short name of the branch's upstream (e.g. "origin/main"), or empty."""
    result = run_git(["rev-parse", "-q", "--verify", "--abbrev-ref", f"{branch}@{{upstream}}"], repo)
    if result.success:
        return result.stdout.strip()
    return ""


def branches_containing(repo: Path, commit: str) -> list[str]:
    """Full ref names of local branches whose tip descends from commit."""
    out = check_output(["for-each-ref", "--format=%(refname)", "--contains", commit, "refs/heads/"], repo)
    return [line for line in out.splitlines() if line]


def branch_exists(repo: Path, branch: str) -> bool:
    """Check if a local branch exists."""
    result = run_git(["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"], repo)
    return result.success


def list_branches(repo: Path) -> None:
    """Print branches to the terminal."""
    run_git_interactive(["--no-pager", "branch"], repo)


def create_branch(repo: Path, name: str, target: str, force: bool = False) -> None:
    """Create (or with force, move) a branch to point at target."""
    args = ["branch", "--quiet"]
    if force:
        args.append("--force")
    check_output(args + ["--", name, target], repo)


def set_branch_upstream(repo: Path, name: str, upstream: str) -> None:
    check_output(["branch", "--quiet", f"--set-upstream-to={upstream}", "--", name], repo)


def delete_branches(repo: Path, names: list[str], force: bool = False) -> None:
    args = ["branch", "--delete"]
    if force:
        args.append("--force")
    check_output(args + ["--"] + names, repo)


def switch_head(repo: Path, name: str) -> None:
    """Point HEAD at a branch without touching the working tree."""
    check_output(["symbolic-ref", "-m", "gg branch", HEAD, f"refs/heads/{name}"], repo)


def refs_pointing_at(repo: Path, commit: str) -> tuple[list[str], list[str]]:
    """Branches and tags whose tip is commit, each sorted by name."""
    out = check_output(
        ["for-each-ref", "--format=%(refname)", f"--points-at={commit}", "refs/heads/", "refs/tags/"],
        repo,
    )
    branches, tags = [], []
    for ref in out.splitlines():
        if ref.startswith("refs/heads/"):
            branches.append(ref[len("refs/heads/"):])
        elif ref.startswith("refs/tags/"):
            tags.append(ref[len("refs/tags/"):])
    return sorted(branches), sorted(tags)

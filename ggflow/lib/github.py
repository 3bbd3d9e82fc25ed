"""
GitHub integration for `gg requestpull`.

Pull requests are created through the gh CLI, which owns authentication.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


# Timeout for GitHub CLI operations (seconds)
GH_TIMEOUT_SECONDS = 30


@dataclass
class PullRequest:
    """Parameters for a new pull request."""
    head: str  # branch to merge from
    base: str  # branch to merge into
    title: str
    body: str = ""
    draft: bool = False
    reviewers: list[str] = field(default_factory=list)
    maintainer_edits: bool = True

    def gh_args(self) -> list[str]:
        args = ["gh", "pr", "create",
                "--base", self.base,
                "--head", self.head,
                "--title", self.title,
                "--body", self.body]
        if self.draft:
            args.append("--draft")
        for reviewer in self.reviewers:
            args += ["--reviewer", reviewer]
        if not self.maintainer_edits:
            args.append("--no-maintainer-edit")
        return args


def check_gh_cli() -> bool:
    """Check if gh CLI is available and authenticated."""
    try:
        result = subprocess.run(
            ["gh", "auth", "status"],
            capture_output=True,
            text=True,
            timeout=GH_TIMEOUT_SECONDS,
        )
        return result.returncode == 0
    except (OSError, subprocess.TimeoutExpired, subprocess.SubprocessError):
        return False


def parse_pr_number(pr_url: str) -> int | None:
    """Extract the PR number from a URL like https://github.com/o/r/pull/12."""
    try:
        return int(pr_url.rstrip("/").split("/")[-1])
    except (ValueError, IndexError):
        return None


def create_github_pr(repo_path: Path, pr: PullRequest) -> tuple[bool, str, int | None]:
    """
    Create a GitHub PR. Does not push.

    Returns: (success, url_or_error, pr_number)
    """
    logger.debug(f"gh pr create --base {pr.base} --head {pr.head}")
    try:
        result = subprocess.run(
            pr.gh_args(),
            capture_output=True,
            text=True,
            cwd=str(repo_path),
            timeout=GH_TIMEOUT_SECONDS,
        )
    except subprocess.TimeoutExpired:
        return False, "GitHub operation timed out", None
    except (OSError, subprocess.SubprocessError) as e:
        return False, f"GitHub operation failed: {e}", None

    if result.returncode != 0:
        return False, f"Failed to create PR: {result.stderr.strip()}", None

    pr_url = result.stdout.strip().splitlines()[-1] if result.stdout.strip() else ""
    return True, pr_url, parse_pr_number(pr_url) if pr_url else None

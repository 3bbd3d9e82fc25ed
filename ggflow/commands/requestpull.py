"""
gg requestpull - Open a GitHub pull request for a branch.

Does not push. The title and body default to a summary of the commits
the branch has on top of its upstream.
"""

import logging
from pathlib import Path

from ggflow.git.branch import get_branch_upstream, get_current_branch
from ggflow.git.revision import cat_file, log_messages, parse_rev, work_tree
from ggflow.lib.config import GGConfig
from ggflow.lib.constants import EXIT_SUCCESS, HEAD, PR_TEMPLATE_PATHS
from ggflow.lib.errors import GGError, UsageError
from ggflow.lib.github import PullRequest, check_gh_cli, create_github_pr

logger = logging.getLogger(__name__)


def read_pull_request_template(repo_root: Path) -> str:
    """Content of the first pull request template committed at HEAD, or empty."""
    for path in PR_TEMPLATE_PATHS:
        content = cat_file(repo_root, HEAD, path)
        if content is not None:
            return content
    return ""


def infer_pull_request_message(repo_root: Path, base: str, head: str) -> tuple[str, str]:
    """
    Summarize base..head as a (title, body) pair.

    The first commit's subject becomes the title and the rest of its
    message starts the body. Each later commit is added as a bullet.
    A repository pull request template, if any, is appended.
    """
    messages = log_messages(repo_root, f"{base}..{head}")
    if not messages:
        raise GGError("infer PR message: no divergent commits")

    subject, _, rest = messages[0].partition("\n")
    title = subject.strip()
    body = rest.strip()
    for msg in messages[1:]:
        body += "\n\n* " + msg.strip()
    template = read_pull_request_template(repo_root).strip()
    body = "\n\n".join(part for part in (body.strip(), template) if part)
    return title, body


def _resolve_branch(repo_root: Path, branch_arg: str | None) -> str:
    if not branch_arg:
        branch = get_current_branch(repo_root)
        if not branch:
            raise GGError("no branch currently checked out")
        return branch
    branch = parse_rev(repo_root, branch_arg).branch
    if not branch:
        raise GGError(f"{branch_arg} is not a branch")
    return branch


def cmd_requestpull(args, cwd: Path, config: GGConfig) -> int:
    title = (args.title or "").strip()
    if args.body and not title:
        raise UsageError("cannot specify --body without specifying --title")

    repo_root = work_tree(cwd)
    branch = _resolve_branch(repo_root, args.branch)
    upstream = get_branch_upstream(repo_root, branch)
    if not upstream:
        raise GGError(f"branch {branch} has no upstream")
    base = upstream.split("/", 1)[1] if "/" in upstream else upstream

    if title:
        body = args.body or ""
    else:
        title, body = infer_pull_request_message(repo_root, f"{branch}@{{upstream}}", branch)

    reviewers = [r for arg in args.reviewers or [] for r in arg.split(",") if r]
    pr = PullRequest(
        head=branch,
        base=base,
        title=title,
        body=body,
        draft=args.draft or config.pr_draft,
        reviewers=reviewers,
        maintainer_edits=args.maintainer_edits,
    )

    if args.dry_run:
        prefix = "[DRAFT] " if pr.draft else ""
        print(f"{prefix}{pr.title}\nMerge into {pr.base} from {pr.head}")
        if pr.body:
            print(f"\n{pr.body}")
        return EXIT_SUCCESS

    if not check_gh_cli():
        raise GGError("gh CLI not available or not authenticated; run `gh auth login`")
    success, result, pr_number = create_github_pr(repo_root, pr)
    if not success:
        raise GGError(result)
    logger.info(f"Created pull request #{pr_number}")
    print(f"Created pull request at {result}")
    return EXIT_SUCCESS

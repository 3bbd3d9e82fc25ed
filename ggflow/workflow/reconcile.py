"""
Change reconciliation for commit and revert.

Decides which files take part in an operation and whether the working
copy's state allows it. Nothing here mutates the repository: a policy
violation is raised before the caller touches anything.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ggflow.git.diff import DiffCode, diff_status
from ggflow.git.pathspec import Pathspec, resolve_all, to_filesystem_path
from ggflow.git.revision import Rev, list_tree, parse_rev
from ggflow.git.status import ChangeKind, classify
from ggflow.lib.constants import HEAD
from ggflow.lib.errors import (
    GitError,
    OutsideRepositoryError,
    PathResolutionError,
    PolicyViolation,
    UsageError,
)

logger = logging.getLogger(__name__)

COMMITTABLE_KINDS = frozenset({
    ChangeKind.ADDED,
    ChangeKind.MODIFIED,
    ChangeKind.REMOVED,
    ChangeKind.COPIED,
    ChangeKind.CHANGED_MODE,
})


def _count_files(n: int, adjective: str) -> str:
    return f"{n} {adjective} file" if n == 1 else f"{n} {adjective} files"


def _unmerged_violation(n: int) -> PolicyViolation:
    return PolicyViolation(f"{_count_files(n, 'unmerged')}; see 'gg status'")


@dataclass(frozen=True)
class PolicyViolations:
    """Counts of working copy conditions that can block a commit."""
    unmerged: int = 0
    missing: int = 0
    missing_staged: int = 0


@dataclass(frozen=True)
class ReconciliationResult:
    """Files selected for a commit.

    commit_all means "every tracked change" (a pending merge); the
    selection is then left to git and selected_files is empty.
    """
    selected_files: tuple[Pathspec, ...] = ()
    violations: PolicyViolations = PolicyViolations()
    commit_all: bool = False


def select_for_commit(
    working_dir: Path,
    repo_root: Path,
    explicit_files: list[str] | None = None,
    merging: bool = False,
    amend: bool = False,
) -> ReconciliationResult:
    """
    Choose the files a commit should include.

    Explicit files are resolved and committed as given, without looking
    at status. During a merge every tracked change is committed, once no
    file is left unmerged. Otherwise status decides: added, modified,
    removed, copied and changed-mode files are selected, renames contribute
    both paths, untracked and ignored files are skipped, and unmerged and
    missing files are counted.

    Raises:
        PathResolutionError: if an explicit file can't be resolved
        StatusQueryError: if git status fails
        PolicyViolation: on unmerged files, nothing to commit (unless
            amending with no missing files), or missing files with staged
            changes
    """
    if explicit_files:
        specs = resolve_all(working_dir, repo_root, explicit_files)
        return ReconciliationResult(selected_files=tuple(specs))
    if merging:
        # A merge commit must record every side; git picks the files.
        with classify(repo_root) as records:
            unmerged = sum(1 for r in records if r.kind is ChangeKind.UNMERGED)
        if unmerged:
            raise _unmerged_violation(unmerged)
        return ReconciliationResult(commit_all=True)

    selected: list[Pathspec] = []
    unmerged = missing = missing_staged = 0
    with classify(repo_root) as records:
        for record in records:
            if record.kind is ChangeKind.MISSING:
                missing += 1
                if record.staged:
                    missing_staged += 1
            elif record.kind is ChangeKind.RENAMED:
                selected.append(record.pathspec)
                selected.append(record.previous_pathspec)
            elif record.kind in COMMITTABLE_KINDS:
                selected.append(record.pathspec)
            elif record.kind is ChangeKind.UNMERGED:
                unmerged += 1
            elif record.kind in (ChangeKind.UNTRACKED, ChangeKind.IGNORED):
                continue
            else:
                raise AssertionError(f"unhandled change kind {record.kind}")
    violations = PolicyViolations(unmerged=unmerged, missing=missing, missing_staged=missing_staged)
    logger.debug(f"commit selection: {len(selected)} selected, {violations}")

    if unmerged:
        raise _unmerged_violation(unmerged)
    if not selected:
        if missing:
            raise PolicyViolation(f"nothing changed ({_count_files(missing, 'missing')}; see 'gg status')")
        if amend:
            return ReconciliationResult(violations=violations)
        raise PolicyViolation("nothing changed")
    if missing_staged:
        raise PolicyViolation(f"git has staged changes for {_count_files(missing_staged, 'missing')}; see 'gg status'")
    return ReconciliationResult(selected_files=tuple(selected), violations=violations)


@dataclass
class RevertPlan:
    """What a revert will do, bucketed by how each file differs from the target.

    adds: tracked now but absent from the target; untracked, kept on disk.
    deletes: in the target but gone from the working tree; restored.
    mods: content differs; backed up, then overwritten.
    chmods: only the file type/mode differs; overwritten.

    When fallback_unstage is set, the target (HEAD) has no commit yet and
    the named files are simply unstaged.
    """
    pathspecs: list[Pathspec]
    revision: Rev | None = None
    fallback_unstage: bool = False
    adds: list[Pathspec] = field(default_factory=list)
    deletes: list[Pathspec] = field(default_factory=list)
    mods: list[Pathspec] = field(default_factory=list)
    chmods: list[Pathspec] = field(default_factory=list)

    @property
    def selected_files(self) -> list[Pathspec]:
        """All affected files, in the order they are mutated."""
        return self.adds + self.mods + self.chmods + self.deletes

    @property
    def empty(self) -> bool:
        return not self.selected_files


def resolve_revert_target(
    working_dir: Path,
    repo_root: Path,
    explicit_files: list[str] | None,
    target_revision: str = HEAD,
    revert_all: bool = False,
) -> RevertPlan:
    """
    Validate arguments and resolve the revision a revert restores to.

    Returns a plan with no buckets filled; see classify_revert().

    Raises:
        UsageError: if no files are given and revert_all is not set
        GitError: if a revision other than HEAD doesn't resolve
        PathResolutionError: if a file is neither on disk nor in the target
        OutsideRepositoryError: if a file lies outside the working copy
    """
    if not explicit_files and not revert_all:
        raise UsageError("no arguments given.  Use --all to revert entire repository.")
    explicit_files = explicit_files or []
    specs = resolve_all(working_dir, repo_root, explicit_files)
    for argument, spec in zip(explicit_files, specs):
        if spec.in_repo:
            continue
        if os.path.lexists(spec.value):
            raise OutsideRepositoryError(argument)
        raise PathResolutionError(argument, "not known")

    try:
        rev = parse_rev(repo_root, target_revision)
    except GitError:
        if target_revision != HEAD:
            raise
        logger.info("HEAD has no commits yet; unstaging files instead of reverting")
        return RevertPlan(pathspecs=specs, fallback_unstage=True)

    for argument, spec in zip(explicit_files, specs):
        if os.path.lexists(to_filesystem_path(repo_root, spec)):
            continue
        if not list_tree(repo_root, rev.commit, [spec]):
            raise PathResolutionError(argument, "not known")
    return RevertPlan(pathspecs=specs, revision=rev)


def classify_revert(repo_root: Path, plan: RevertPlan) -> RevertPlan:
    """Fill the plan's buckets from a diff of the target against the working tree."""
    with diff_status(repo_root, plan.revision.commit, plan.pathspecs, disable_renames=True) as records:
        for record in records:
            if record.code is DiffCode.ADDED:
                plan.adds.append(record.pathspec)
            elif record.code is DiffCode.DELETED:
                plan.deletes.append(record.pathspec)
            elif record.code is DiffCode.MODIFIED:
                plan.mods.append(record.pathspec)
            elif record.code is DiffCode.CHANGED_MODE:
                plan.chmods.append(record.pathspec)
            else:
                logger.debug(f"revert: skipping {record.code.value} {record.path}")
    return plan


def select_for_revert(
    working_dir: Path,
    repo_root: Path,
    explicit_files: list[str] | None = None,
    target_revision: str = HEAD,
    revert_all: bool = False,
) -> RevertPlan:
    """Resolve the target and bucket every affected file. See RevertPlan."""
    plan = resolve_revert_target(working_dir, repo_root, explicit_files, target_revision, revert_all)
    if plan.fallback_unstage:
        return plan
    return classify_revert(repo_root, plan)

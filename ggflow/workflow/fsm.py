"""Revert state machine using transitions library.

    start -> resolve_revision -> fallback_unstage ----------------------> done
                              -> classify_diff -> [backup_phase] -> mutate_phase -> done

backup_phase is skipped when backups are disabled. Once mutate_phase is
reached it always runs, even if nothing was backed up.

Usage:
    from ggflow.workflow.fsm import RevertSequence

    seq = RevertSequence(working_dir, repo_root, ["a.txt"])
    plan = seq.run()
"""

import logging
from pathlib import Path

from transitions import Machine

from ggflow.lib.constants import HEAD
from ggflow.workflow.reconcile import RevertPlan, classify_revert, resolve_revert_target
from ggflow.workflow.sequencer import backup, mutate, unstage

logger = logging.getLogger(__name__)


STATES = [
    "start",
    "resolve_revision",
    "fallback_unstage",
    "classify_diff",
    "backup_phase",
    "mutate_phase",
    "done",
]

TRANSITIONS = [
    {"trigger": "begin", "source": "start", "dest": "resolve_revision"},

    # Unborn HEAD: nothing to revert to
    {"trigger": "fall_back", "source": "resolve_revision", "dest": "fallback_unstage"},
    {"trigger": "revision_resolved", "source": "resolve_revision", "dest": "classify_diff"},

    {"trigger": "diff_classified", "source": "classify_diff", "dest": "backup_phase", "unless": "backups_disabled"},
    {"trigger": "diff_classified", "source": "classify_diff", "dest": "mutate_phase", "conditions": "backups_disabled"},
    {"trigger": "backup_done", "source": "backup_phase", "dest": "mutate_phase"},

    {"trigger": "finish", "source": "fallback_unstage", "dest": "done"},
    {"trigger": "finish", "source": "mutate_phase", "dest": "done"},
]


class RevertSequence:
    """Drives one `gg revert` through its states.

    Each step raises on failure, leaving the machine in the state where it
    stopped; `state` tells the caller how far the revert got.
    """

    def __init__(
        self,
        working_dir: Path,
        repo_root: Path,
        files: list[str] | None,
        target_revision: str = HEAD,
        revert_all: bool = False,
        backups: bool = True,
    ):
        self.working_dir = working_dir
        self.repo_root = repo_root
        self.files = files or []
        self.target_revision = target_revision
        self.revert_all = revert_all
        self.backups = backups
        self.plan: RevertPlan | None = None
        self.backup_count = 0

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="start",
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def backups_disabled(self, event) -> bool:
        return not self.backups

    def on_state_change(self, event) -> None:
        logger.debug(f"[revert] {event.transition.source} -> {event.transition.dest} ({event.event.name})")

    def run(self) -> RevertPlan:
        """Run the revert to completion. Returns the executed plan."""
        self.begin()
        self.plan = resolve_revert_target(
            self.working_dir, self.repo_root, self.files, self.target_revision, self.revert_all,
        )
        if self.plan.fallback_unstage:
            self.fall_back()
            unstage(self.repo_root, self.plan.pathspecs)
            self.finish()
            return self.plan

        self.revision_resolved()
        classify_revert(self.repo_root, self.plan)
        self.diff_classified()

        if self.state == "backup_phase":
            self.backup_count = backup(self.repo_root, self.plan.mods)
            self.backup_done()

        mutate(
            self.repo_root,
            adds=self.plan.adds,
            deletes=self.plan.deletes,
            mods=self.plan.mods,
            chmods=self.plan.chmods,
            target_revision=self.plan.revision.commit,
        )
        self.finish()
        return self.plan

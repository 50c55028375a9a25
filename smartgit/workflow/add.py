"""
Add workflow: preview changes, confirm, then stage them per the staging plan.

    ready -> nothing_to_do                      (clean tree)
    ready -> previewed -> cancelled             (anything but "yes")
    ready -> previewed -> confirmed -> staged
    ready -> previewed -> confirmed -> nothing_to_do   (plan emptied by dotfile gate)
"""

import logging
import os
from dataclasses import replace

from smartgit.git.diff import get_unstaged_diff
from smartgit.git.repo import get_repo_root
from smartgit.git.status import get_status_entries
from smartgit.workflow.context import ConfirmGate, WorkflowContext
from smartgit.workflow.fsm import WorkflowFSM
from smartgit.workflow.outcomes import AddOutcome, AddPreview, AddResult
from smartgit.workflow.prologue import begin
from smartgit.workflow.staging import apply_plan, build_plan, gate_dotfiles, orient_renames

logger = logging.getLogger(__name__)

STATES = ["previewed", "confirmed", "nothing_to_do", "cancelled", "staged"]

TRANSITIONS = [
    {"trigger": "no_changes", "source": "ready", "dest": "nothing_to_do"},
    {"trigger": "show_preview", "source": "ready", "dest": "previewed"},
    {"trigger": "decline", "source": "previewed", "dest": "cancelled"},
    {"trigger": "accept", "source": "previewed", "dest": "confirmed"},
    {"trigger": "empty_plan", "source": "confirmed", "dest": "nothing_to_do"},
    {"trigger": "apply", "source": "confirmed", "dest": "staged"},
]

TERMINAL = {"nothing_to_do", "cancelled", "staged"}

OUTCOME_FOR = {
    "nothing_to_do": AddOutcome.NOTHING_TO_DO,
    "cancelled": AddOutcome.CANCELLED,
    "staged": AddOutcome.STAGED,
}


def run_add(ctx: WorkflowContext) -> AddResult:
    """Stage working tree changes after an explicit yes."""
    fsm = WorkflowFSM("add", STATES, TRANSITIONS, TERMINAL)
    repo = begin(ctx, fsm)

    changes = get_status_entries(repo)
    if not changes:
        fsm.no_changes()
        return AddResult(OUTCOME_FOR[fsm.require_terminal()])

    # Porcelain paths are relative to the top of the work tree.
    root = get_repo_root(repo)
    changes = orient_renames(changes, lambda path: os.path.lexists(root / path))

    preview = AddPreview(
        changes=changes,
        diff=get_unstaged_diff(repo),
        plan=build_plan(changes),
    )
    fsm.show_preview()

    gate = ConfirmGate(name="stage", question="Stage these changes?", preview=preview)
    if ctx.confirm(gate) is not True:
        fsm.decline()
        return AddResult(OUTCOME_FOR[fsm.require_terminal()], preview=preview)
    fsm.accept()

    plan = gate_dotfiles(preview.plan, ctx.confirm, ctx.config.dotfiles)
    if plan.is_empty:
        fsm.empty_plan()
        return AddResult(OUTCOME_FOR[fsm.require_terminal()], preview=preview, applied=plan)

    apply_plan(replace(repo, path=root), plan)
    logger.info(f"Staged {len(plan.to_add)} path(s), removed {len(plan.to_remove)} from index")
    fsm.apply()
    return AddResult(OUTCOME_FOR[fsm.require_terminal()], preview=preview, applied=plan)

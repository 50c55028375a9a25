"""
Commit workflow.

Refuses when nothing is staged or the index has unresolved conflicts.
Otherwise commits, then reports divergence from upstream. The report is
informational: once the commit exists no later failure undoes it, and a
missing upstream is an outcome, not an error.
"""

import logging

from smartgit.git.branch import ABSENT_UPSTREAM, AbsentUpstream, AheadBehind, compute_ahead_behind
from smartgit.git.commit import commit
from smartgit.git.errors import GitError
from smartgit.git.status import get_staged_conflicts, get_staged_files
from smartgit.workflow.context import WorkflowContext
from smartgit.workflow.fsm import WorkflowFSM
from smartgit.workflow.outcomes import CommitOutcome, CommitResult
from smartgit.workflow.prologue import begin

logger = logging.getLogger(__name__)

STATES = [
    "nothing_staged",
    "unresolved_conflicts",
    "checked",
    "committed",
    "up_to_date",
    "ahead",
    "behind",
    "diverged",
    "no_upstream",
    "divergence_unknown",
]

TRANSITIONS = [
    {"trigger": "nothing_staged", "source": "ready", "dest": "nothing_staged"},
    {"trigger": "conflicts_found", "source": "ready", "dest": "unresolved_conflicts"},
    {"trigger": "checks_passed", "source": "ready", "dest": "checked"},
    {"trigger": "do_commit", "source": "checked", "dest": "committed"},

    # Post-commit divergence report
    {"trigger": "report_up_to_date", "source": "committed", "dest": "up_to_date"},
    {"trigger": "report_ahead", "source": "committed", "dest": "ahead"},
    {"trigger": "report_behind", "source": "committed", "dest": "behind"},
    {"trigger": "report_diverged", "source": "committed", "dest": "diverged"},
    {"trigger": "report_no_upstream", "source": "committed", "dest": "no_upstream"},
    {"trigger": "report_unknown", "source": "committed", "dest": "divergence_unknown"},
]

TERMINAL = {
    "nothing_staged", "unresolved_conflicts",
    "up_to_date", "ahead", "behind", "diverged", "no_upstream", "divergence_unknown",
}

OUTCOME_FOR = {
    "nothing_staged": CommitOutcome.NOTHING_STAGED,
    "unresolved_conflicts": CommitOutcome.UNRESOLVED_CONFLICTS,
    "up_to_date": CommitOutcome.COMMITTED_UP_TO_DATE,
    "ahead": CommitOutcome.COMMITTED_AHEAD,
    "behind": CommitOutcome.COMMITTED_BEHIND,
    "diverged": CommitOutcome.COMMITTED_DIVERGED,
    "no_upstream": CommitOutcome.COMMITTED_NO_UPSTREAM,
    "divergence_unknown": CommitOutcome.COMMITTED,
}


def divergence_trigger(divergence: AheadBehind | AbsentUpstream) -> str:
    """Pick the report trigger for a post-commit divergence."""
    if divergence is ABSENT_UPSTREAM:
        return "report_no_upstream"
    if divergence.ahead == 0 and divergence.behind == 0:
        return "report_up_to_date"
    if divergence.behind == 0:
        return "report_ahead"
    if divergence.ahead == 0:
        return "report_behind"
    return "report_diverged"


def run_commit(ctx: WorkflowContext, message: str | None = None) -> CommitResult:
    """
    Commit what is staged.

    Args:
        ctx: Workflow context; ctx.ask_message is used when message is None
        message: Commit message. Passed to git as-is, even if empty.

    Raises:
        GitError: any failure up to and including the commit itself
    """
    fsm = WorkflowFSM("commit", STATES, TRANSITIONS, TERMINAL)
    repo = begin(ctx, fsm)

    if not get_staged_files(repo):
        fsm.nothing_staged()
        return CommitResult(OUTCOME_FOR[fsm.require_terminal()])

    conflicts = get_staged_conflicts(repo)
    if conflicts:
        fsm.conflicts_found()
        return CommitResult(OUTCOME_FOR[fsm.require_terminal()], conflicts=conflicts)
    fsm.checks_passed()

    if message is None:
        message = ctx.ask_message()

    summary = commit(repo, message)
    fsm.do_commit()

    try:
        divergence = compute_ahead_behind(repo)
    except GitError as e:
        logger.warning(f"Commit created, but divergence check failed: {e}")
        fsm.report_unknown()
        return CommitResult(OUTCOME_FOR[fsm.require_terminal()], message=message, summary=summary)

    fsm.trigger(divergence_trigger(divergence))
    return CommitResult(
        OUTCOME_FOR[fsm.require_terminal()],
        message=message,
        summary=summary,
        divergence=divergence,
    )

"""
Push workflow.

Refuses on a detached HEAD, shows what would be transferred, and pushes only
after an explicit yes. When the branch has no upstream the push also sets
one up against the configured remote.
"""

import logging

from smartgit.git.branch import (
    ABSENT_UPSTREAM,
    AbsentUpstream,
    AheadBehind,
    compute_ahead_behind,
    get_commits_between,
    get_current_branch,
    is_detached,
    resolve_upstream,
)
from smartgit.git.diff import get_files_between
from smartgit.git.remote import push, push_set_upstream
from smartgit.git.repo import get_repo_root
from smartgit.workflow.context import ConfirmGate, WorkflowContext
from smartgit.workflow.fsm import WorkflowFSM
from smartgit.workflow.outcomes import PushKind, PushOutcome, PushPlan, PushResult
from smartgit.workflow.prologue import begin

logger = logging.getLogger(__name__)

STATES = ["detached", "planned", "cancelled", "confirmed", "pushed", "pushed_set_upstream"]

TRANSITIONS = [
    {"trigger": "refuse_detached", "source": "ready", "dest": "detached"},
    {"trigger": "plan", "source": "ready", "dest": "planned"},
    {"trigger": "decline", "source": "planned", "dest": "cancelled"},
    {"trigger": "accept", "source": "planned", "dest": "confirmed"},
    {"trigger": "push_tracked", "source": "confirmed", "dest": "pushed"},
    {"trigger": "push_new_upstream", "source": "confirmed", "dest": "pushed_set_upstream"},
]

TERMINAL = {"detached", "cancelled", "pushed", "pushed_set_upstream"}

OUTCOME_FOR = {
    "detached": PushOutcome.DETACHED_HEAD,
    "cancelled": PushOutcome.CANCELLED,
    "pushed": PushOutcome.PUSHED,
    "pushed_set_upstream": PushOutcome.PUSHED_SET_UPSTREAM,
}


def classify_push(divergence: AheadBehind | AbsentUpstream) -> PushKind:
    """Push classification from ahead/behind alone."""
    if divergence is ABSENT_UPSTREAM:
        return PushKind.NEW_UPSTREAM
    ahead, behind = divergence.ahead, divergence.behind
    if ahead > 0 and behind > 0:
        return PushKind.NON_FAST_FORWARD
    if behind > 0:
        return PushKind.REJECT
    if ahead > 0:
        return PushKind.FAST_FORWARD
    return PushKind.NOTHING_TO_PUSH


def run_push(ctx: WorkflowContext) -> PushResult:
    """Push the current branch after showing a preview and getting a yes."""
    fsm = WorkflowFSM("push", STATES, TRANSITIONS, TERMINAL)
    repo = begin(ctx, fsm)
    root = get_repo_root(repo)

    branch = get_current_branch(repo)
    if is_detached(branch):
        fsm.refuse_detached()
        return PushResult(OUTCOME_FOR[fsm.require_terminal()], branch=branch)

    upstream = resolve_upstream(repo)
    divergence = compute_ahead_behind(repo) if upstream is not ABSENT_UPSTREAM else ABSENT_UPSTREAM

    commits: list[str] = []
    files: list[str] = []
    if upstream is not ABSENT_UPSTREAM:
        commits = get_commits_between(repo, upstream)
        files = get_files_between(repo, upstream)

    plan = PushPlan(
        branch=branch,
        upstream=None if upstream is ABSENT_UPSTREAM else upstream,
        divergence=divergence,
        kind=classify_push(divergence),
        commits=commits,
        files=files,
        remote=ctx.config.remote,
    )
    fsm.plan()

    gate = ConfirmGate(name="push", question="Proceed with push?", preview=plan)
    if ctx.confirm(gate) is not True:
        fsm.decline()
        return PushResult(OUTCOME_FOR[fsm.require_terminal()], plan=plan, branch=branch)
    fsm.accept()

    if plan.upstream is not None:
        result = push(repo, cwd=root)
        fsm.push_tracked()
    else:
        logger.info(f"No upstream for {branch}; pushing with -u {plan.remote} {branch}")
        result = push_set_upstream(repo, plan.remote, branch, cwd=root)
        fsm.push_new_upstream()

    # stdout already went to the terminal; stderr carries the remote report
    output = result.stderr_text.strip()
    return PushResult(OUTCOME_FOR[fsm.require_terminal()], plan=plan, branch=branch, output=output)

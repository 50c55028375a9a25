"""
Preview workflow: build the commit that `commit` would create, without
moving any ref.

The object is written from the current index with HEAD (if any) as parent.
Nothing references it, so git gc will reclaim it unless the caller keeps a
ref to the returned id.
"""

import logging

from smartgit.git.branch import get_head_branch, get_head_sha, short_sha
from smartgit.git.commit import commit_tree, write_tree
from smartgit.git.diff import diffstat, get_staged_patch, show_stat
from smartgit.workflow.context import WorkflowContext
from smartgit.workflow.fsm import WorkflowFSM
from smartgit.workflow.outcomes import PreviewResult
from smartgit.workflow.prologue import begin

logger = logging.getLogger(__name__)

STATES = ["built", "previewed"]

TRANSITIONS = [
    {"trigger": "build", "source": "ready", "dest": "built"},
    {"trigger": "finish", "source": "built", "dest": "previewed"},
]

TERMINAL = {"previewed"}


def run_preview(
    ctx: WorkflowContext,
    message: str | None = None,
    show_diffstat: bool = True,
) -> PreviewResult:
    """
    Create an unreferenced commit object from the index.

    Args:
        ctx: Workflow context
        message: Commit message for the preview (config default if None)
        show_diffstat: Include a diffstat against HEAD, or a full stat of the
            object itself on an unborn branch

    Returns:
        PreviewResult; .sha is always the new object id
    """
    fsm = WorkflowFSM("preview", STATES, TRANSITIONS, TERMINAL)
    repo = begin(ctx, fsm)

    branch = get_head_branch(repo)
    parent = get_head_sha(repo)
    if parent is None:
        logger.info("HEAD is unborn; preview commit will have no parent")

    msg = message if message is not None else ctx.config.preview_message
    tree = write_tree(repo)
    sha = commit_tree(repo, tree, parent, msg)
    fsm.build()

    stat = None
    if show_diffstat:
        stat = diffstat(repo, "HEAD", sha) if parent is not None else show_stat(repo, sha)

    patch = None
    if branch is not None:
        patch = get_staged_patch(repo)

    fsm.finish()
    fsm.require_terminal()
    return PreviewResult(
        sha=sha,
        short_sha=short_sha(repo, sha),
        tree=tree,
        parent=parent,
        branch=branch,
        message=msg,
        diffstat=stat,
        patch=patch,
    )

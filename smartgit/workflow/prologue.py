"""Common prologue: validate the work tree, then refresh the index."""

import logging

from smartgit.git.repo import Repository, open_repository, refresh_index
from smartgit.workflow.context import WorkflowContext
from smartgit.workflow.fsm import WorkflowFSM

logger = logging.getLogger(__name__)


def begin(ctx: WorkflowContext, fsm: WorkflowFSM) -> Repository:
    """
    Run the prologue shared by every workflow.

    Raises:
        NotARepository: ctx.repo_path is not inside a work tree (fail fast)
    """
    repo = open_repository(ctx.repo_path, ctx.git_options)
    fsm.validate()

    if not refresh_index(repo):
        logger.info(f"[{fsm.workflow}] continuing without index refresh")
    fsm.refresh()
    return repo

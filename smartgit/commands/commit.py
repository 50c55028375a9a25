"""
smartgit commit - Commit staged changes and report upstream divergence.
"""

from smartgit.lib.console import note, ok, plain, refuse
from smartgit.workflow import CommitOutcome, WorkflowContext, run_commit

MESSAGES = {
    CommitOutcome.COMMITTED_UP_TO_DATE: (ok, "Committed on top of up-to-date upstream."),
    CommitOutcome.COMMITTED_AHEAD: (ok, "Committed; branch ahead of upstream."),
    CommitOutcome.COMMITTED_BEHIND: (note, "Committed; branch behind upstream."),
    CommitOutcome.COMMITTED_DIVERGED: (note, "Committed; branch diverged from upstream."),
    CommitOutcome.COMMITTED_NO_UPSTREAM: (note, "Commit created; no upstream configured."),
    CommitOutcome.COMMITTED: (ok, "Commit created."),
}


def cmd_commit(args, ctx: WorkflowContext) -> int:
    """Commit what is staged."""
    result = run_commit(ctx, message=args.message)

    if result.outcome is CommitOutcome.NOTHING_STAGED:
        note("Nothing staged to commit.")
        return 0

    if result.outcome is CommitOutcome.UNRESOLVED_CONFLICTS:
        refuse("Resolve conflicts in index before committing:")
        for path in result.conflicts:
            plain(f"  {path}")
        return 1

    if result.summary:
        plain(result.summary)
    show, text = MESSAGES[result.outcome]
    show(text)
    return 0

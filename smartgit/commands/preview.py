"""
smartgit preview - Build the commit that would be created, without moving refs.
"""

from smartgit.lib.console import note, plain
from smartgit.workflow import WorkflowContext, run_preview


def cmd_preview(args, ctx: WorkflowContext) -> int:
    """Create a preview commit object and print its id."""
    result = run_preview(ctx, message=args.message, show_diffstat=not args.no_stat)

    if result.diffstat:
        plain(result.diffstat)

    if result.branch:
        note(f"Preview commit {result.short_sha} for branch {result.branch}")
        if result.patch:
            plain(result.patch)
    else:
        note(f"Preview commit {result.short_sha} (detached or unborn HEAD)")

    # Full id last so scripts can grab it with `tail -1`
    plain(result.sha)
    return 0

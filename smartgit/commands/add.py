"""
smartgit add - Preview changes and stage them on confirmation.
"""

from smartgit.lib.console import note, ok, plain, refuse
from smartgit.workflow import AddOutcome, AddPreview, WorkflowContext, run_add


def render_add_preview(preview: AddPreview) -> None:
    """Show unstaged diff, status entries and the staging plan."""
    note("Git Diff")
    if preview.diff:
        plain(preview.diff)
    else:
        note("(No unstaged diff output; changes may be untracked files only.)")

    note("\nStatus (including untracked):")
    for change in preview.changes:
        plain(str(change))

    if preview.plan.to_add:
        note("\nWill stage:")
        for path in preview.plan.to_add:
            plain(f"  + {path}")
    if preview.plan.to_remove:
        note("\nWill remove from index (files on disk untouched):")
        for path in preview.plan.to_remove:
            plain(f"  - {path}")


def render_dotfiles(paths: list[str]) -> None:
    note("Dotfiles in this change:")
    for path in paths:
        plain(f"  {path}")


def cmd_add(args, ctx: WorkflowContext) -> int:
    """Stage working tree changes after confirmation."""
    result = run_add(ctx)

    if result.outcome is AddOutcome.NOTHING_TO_DO:
        note("No changes to add.")
    elif result.outcome is AddOutcome.CANCELLED:
        refuse("✗ Not staging changes.")
    elif result.outcome is AddOutcome.STAGED:
        applied = result.applied
        ok(f"✓ Staged {len(applied.to_add)} path(s), "
           f"removed {len(applied.to_remove)} from index.")
    return 0

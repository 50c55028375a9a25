"""
smartgit push - Show what a push would transfer, then push on confirmation.
"""

from rich.markup import escape

from smartgit.lib.console import console, note, ok, plain, refuse
from smartgit.workflow import PushOutcome, PushPlan, WorkflowContext, run_push

RULE = "-------------------------------------------------"


def render_push_plan(plan: PushPlan) -> None:
    console.print(f"[cyan]You are about to push from branch:[/cyan] [yellow]{escape(plan.branch)}[/yellow]")
    if plan.upstream:
        console.print(f"[cyan]Upstream:[/cyan] [yellow]{escape(plan.upstream)}[/yellow]")
    else:
        note(f"No upstream configured; will push with -u {plan.remote} {plan.branch}.")

    console.print(f"[cyan]{RULE}[/cyan]")
    console.print(f"[green]Push type:[/green] {escape(plan.kind.value)}")

    ahead = getattr(plan.divergence, "ahead", 0)
    console.print(f"[green]Local commits to upload[/green] ({ahead}):")
    if not plan.commits:
        note("  (No new commits or no upstream to compare.)")
    for line in plan.commits:
        console.print(f"  • [green]{escape(line)}[/green]")

    console.print("\n[green]Files changed:[/green]")
    if not plan.files:
        note("  (No file changes or no upstream to compare.)")
    for path in plan.files:
        console.print(f"  • [yellow]{escape(path)}[/yellow]")

    flag = "YES" if plan.remote_ahead else "NO"
    console.print(f"\nRemote ahead? [yellow]{flag}[/yellow]")
    console.print(f"[cyan]{RULE}[/cyan]")


def cmd_push(args, ctx: WorkflowContext) -> int:
    """Push current branch after confirmation."""
    result = run_push(ctx)

    if result.outcome is PushOutcome.DETACHED_HEAD:
        refuse("You are in a detached HEAD state; refusing to push.")
        return 1
    if result.outcome is PushOutcome.CANCELLED:
        refuse("Push cancelled.")
        return 0

    if result.output:
        plain(result.output)
    if result.outcome is PushOutcome.PUSHED_SET_UPSTREAM:
        ok(f"✓ Pushed and set upstream to {result.plan.remote}/{result.branch}.")
    else:
        ok("✓ Push completed successfully.")
    return 0

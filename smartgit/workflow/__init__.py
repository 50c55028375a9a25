"""User-facing workflows built on smartgit.git."""

from smartgit.workflow.context import ConfirmGate, WorkflowContext
from smartgit.workflow.outcomes import (
    AddOutcome,
    AddPreview,
    AddResult,
    CommitOutcome,
    CommitResult,
    PushKind,
    PushOutcome,
    PushPlan,
    PushResult,
    PreviewResult,
)
from smartgit.workflow.staging import (
    StageAction,
    StagingPlan,
    apply_plan,
    build_plan,
    classify_change,
    gate_dotfiles,
    is_dotfile,
    orient_renames,
)
from smartgit.workflow.add import run_add
from smartgit.workflow.commit import run_commit
from smartgit.workflow.push import classify_push, run_push
from smartgit.workflow.preview import run_preview

__all__ = [
    "ConfirmGate",
    "WorkflowContext",
    "AddOutcome",
    "AddPreview",
    "AddResult",
    "CommitOutcome",
    "CommitResult",
    "PushKind",
    "PushOutcome",
    "PushPlan",
    "PushResult",
    "PreviewResult",
    "StageAction",
    "StagingPlan",
    "apply_plan",
    "build_plan",
    "classify_change",
    "gate_dotfiles",
    "is_dotfile",
    "orient_renames",
    "run_add",
    "run_commit",
    "classify_push",
    "run_push",
    "run_preview",
]

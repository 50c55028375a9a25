"""
Terminal results of the workflows.

Each workflow returns exactly one of these; rendering them is left to the
caller (see smartgit.commands).
"""

from dataclasses import dataclass, field
from enum import Enum

from smartgit.git.branch import AbsentUpstream, AheadBehind
from smartgit.git.status import Change
from smartgit.workflow.staging import StagingPlan


class AddOutcome(Enum):
    NOTHING_TO_DO = "nothing_to_do"
    CANCELLED = "cancelled"
    STAGED = "staged"


class CommitOutcome(Enum):
    NOTHING_STAGED = "nothing_staged"
    UNRESOLVED_CONFLICTS = "unresolved_conflicts"
    COMMITTED_UP_TO_DATE = "committed_up_to_date"
    COMMITTED_AHEAD = "committed_ahead"
    COMMITTED_BEHIND = "committed_behind"
    COMMITTED_DIVERGED = "committed_diverged"
    COMMITTED_NO_UPSTREAM = "committed_no_upstream"
    COMMITTED = "committed"  # divergence unknown (query failed after commit)

    @property
    def committed(self) -> bool:
        return self not in (CommitOutcome.NOTHING_STAGED, CommitOutcome.UNRESOLVED_CONFLICTS)


class PushKind(Enum):
    NOTHING_TO_PUSH = "NOTHING TO PUSH"
    FAST_FORWARD = "FAST-FORWARD"
    REJECT = "REJECT (remote ahead)"
    NON_FAST_FORWARD = "NON-FAST-FORWARD (diverged)"
    NEW_UPSTREAM = "NEW UPSTREAM (first push)"


class PushOutcome(Enum):
    DETACHED_HEAD = "detached_head"
    CANCELLED = "cancelled"
    PUSHED = "pushed"
    PUSHED_SET_UPSTREAM = "pushed_set_upstream"


@dataclass(frozen=True)
class AddPreview:
    """What the user sees before agreeing to stage."""
    changes: list[Change]
    diff: str
    plan: StagingPlan


@dataclass
class AddResult:
    outcome: AddOutcome
    preview: AddPreview | None = None
    applied: StagingPlan | None = None


@dataclass
class CommitResult:
    outcome: CommitOutcome
    message: str | None = None
    summary: str = ""  # git's own commit output
    conflicts: list[str] = field(default_factory=list)
    divergence: AheadBehind | AbsentUpstream | None = None


@dataclass(frozen=True)
class PushPlan:
    """Everything shown before the push confirmation."""
    branch: str
    upstream: str | None
    divergence: AheadBehind | AbsentUpstream
    kind: PushKind
    commits: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    remote: str = "origin"

    @property
    def remote_ahead(self) -> bool:
        return isinstance(self.divergence, AheadBehind) and self.divergence.behind > 0


@dataclass
class PushResult:
    outcome: PushOutcome
    plan: PushPlan | None = None
    branch: str | None = None
    output: str = ""


@dataclass
class PreviewResult:
    """A commit object built from the index. No ref points at it."""
    sha: str
    short_sha: str
    tree: str
    parent: str | None
    branch: str | None
    message: str
    diffstat: str | None = None
    patch: str | None = None

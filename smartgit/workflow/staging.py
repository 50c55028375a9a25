"""
Staging planner.

Turns parsed status records into an add/remove plan. Classification is a
pure function of the Change sequence; only apply_plan talks to git.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import PurePosixPath
from typing import Callable

from smartgit.git.commit import stage_paths, unstage_removed
from smartgit.git.repo import Repository
from smartgit.git.status import Change, RENAME_CODES
from smartgit.lib.config import DotfilePolicy
from smartgit.workflow.context import ConfirmCallback, ConfirmGate

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"


class StageAction(Enum):
    ADD = "add"
    REMOVE = "remove"
    IGNORE = "ignore"


@dataclass(frozen=True)
class StagingPlan:
    """Paths to `git add` and paths to drop from the index.

    Stored as tuples in first-seen order, without duplicates.
    """
    to_add: tuple[str, ...] = ()
    to_remove: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def dotfiles(self) -> list[str]:
        return [p for p in self.to_add + self.to_remove if is_dotfile(p)]

    def without_dotfiles(self) -> "StagingPlan":
        return StagingPlan(
            to_add=tuple(p for p in self.to_add if not is_dotfile(p)),
            to_remove=tuple(p for p in self.to_remove if not is_dotfile(p)),
        )


def classify_change(change: Change) -> StageAction:
    """First matching rule wins."""
    if change.is_untracked:
        return StageAction.ADD
    if change.worktree_status == "M" or change.index_status == "A":
        return StageAction.ADD
    if change.worktree_status == "D":
        return StageAction.REMOVE
    if change.index_status in RENAME_CODES:
        return StageAction.ADD
    return StageAction.IGNORE


def orient_renames(changes: list[Change], exists: Callable[[str], bool]) -> list[Change]:
    """
    Point each rename/copy record at the path that is in the work tree.

    git emits the destination first, so the record read as (old, new) can
    name a path that no longer exists. When only old_path exists the two are
    swapped; otherwise the record is left alone.
    """
    oriented = []
    for change in changes:
        if change.old_path is not None and not exists(change.path) and exists(change.old_path):
            change = replace(change, path=change.old_path, old_path=change.path)
        oriented.append(change)
    return oriented


def build_plan(changes: list[Change]) -> StagingPlan:
    """Classify every change. Renames and copies contribute their new path."""
    to_add: dict[str, None] = {}
    to_remove: dict[str, None] = {}
    for change in changes:
        action = classify_change(change)
        if action is StageAction.ADD:
            to_add.setdefault(change.path)
        elif action is StageAction.REMOVE:
            to_remove.setdefault(change.path)
    return StagingPlan(to_add=tuple(to_add), to_remove=tuple(to_remove))


def is_dotfile(path: str) -> bool:
    """True if the base name starts with "." (the .git directory itself excluded)."""
    name = PurePosixPath(path.rstrip("/")).name
    return name.startswith(".") and name != GIT_DIR_NAME


def gate_dotfiles(
    plan: StagingPlan,
    confirm: ConfirmCallback,
    policy: DotfilePolicy = DotfilePolicy.ASK,
) -> StagingPlan:
    """
    Ask once whether dotfiles should be staged.

    One question covers every dotfile in the plan. Anything but an explicit
    yes drops all of them from both sets.
    """
    dotfiles = plan.dotfiles()
    if not dotfiles:
        return plan

    if policy is DotfilePolicy.INCLUDE:
        include = True
    elif policy is DotfilePolicy.EXCLUDE:
        include = False
    else:
        include = confirm(ConfirmGate(
            name="dotfiles",
            question=f"Include {len(dotfiles)} dotfile(s) in staging?",
            preview=dotfiles,
        )) is True

    if include:
        return plan
    logger.info(f"Excluding dotfiles from staging: {dotfiles}")
    return plan.without_dotfiles()


def apply_plan(repo: Repository, plan: StagingPlan) -> None:
    """At most one bulk add and one bulk index removal."""
    if plan.to_add:
        stage_paths(repo, list(plan.to_add))
    if plan.to_remove:
        unstage_removed(repo, list(plan.to_remove))

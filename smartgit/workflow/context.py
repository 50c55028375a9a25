"""
Workflow context: everything a workflow needs from the outside world.

The presentation layer supplies the callbacks; workflows never read stdin
or print themselves.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from smartgit.git.runner import GitOptions
from smartgit.lib.config import SmartGitConfig


@dataclass(frozen=True)
class ConfirmGate:
    """A single yes/no question, plus whatever should be shown before asking it."""
    name: str  # "stage", "dotfiles", "push"
    question: str
    preview: Any = None


# Callback signatures
ConfirmCallback = Callable[[ConfirmGate], bool]
MessageCallback = Callable[[], str]


def _never(gate: ConfirmGate) -> bool:
    return False


def _empty_message() -> str:
    return ""


@dataclass
class WorkflowContext:
    """Inputs shared by add/commit/push/preview."""
    repo_path: Path
    config: SmartGitConfig = field(default_factory=SmartGitConfig)
    # Missing callbacks fall back to the safe answer: "no" and an empty message.
    confirm: ConfirmCallback = _never
    ask_message: MessageCallback = _empty_message

    @property
    def git_options(self) -> GitOptions:
        return GitOptions(
            show_calls=self.config.show_calls,
            max_output_bytes=self.config.max_output_bytes,
        )

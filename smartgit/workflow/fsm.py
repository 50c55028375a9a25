"""Workflow state machine using transitions library.

Each user-facing workflow (add, commit, push, preview) is a small FSM:
- Explicit triggers (named steps)
- Terminal states that map one-to-one onto an outcome
- Every transition logged

Usage:
    from smartgit.workflow.fsm import WorkflowFSM

    fsm = WorkflowFSM("add", ADD_STATES, ADD_TRANSITIONS, ADD_TERMINAL)
    fsm.validate()
    fsm.refresh()
    ...
    assert fsm.is_terminal
"""

import logging

from transitions import Machine

logger = logging.getLogger(__name__)


# Shared prologue every workflow starts with
PROLOGUE_STATES = ["start", "validated", "ready"]

PROLOGUE_TRANSITIONS = [
    {"trigger": "validate", "source": "start", "dest": "validated"},
    {"trigger": "refresh", "source": "validated", "dest": "ready"},
]


class WorkflowFSM:
    """State machine for one run of a workflow.

    Wraps the transitions library with workflow-specific logic:
    - Prologue states/transitions added automatically
    - Logs all transitions
    - Knows which states are terminal
    """

    def __init__(
        self,
        workflow: str,
        states: list[str],
        transitions: list[dict],
        terminal: set[str],
    ):
        """Initialize FSM for a workflow.

        Args:
            workflow: Name used in log lines ("add", "commit", ...)
            states: Workflow-specific states (prologue states are prepended)
            transitions: Workflow-specific transitions, starting from "ready"
            terminal: States in which the workflow has finished
        """
        self.workflow = workflow
        self.terminal = set(terminal)
        self.history: list[str] = []

        self.machine = Machine(
            model=self,
            states=PROLOGUE_STATES + list(states),
            transitions=PROLOGUE_TRANSITIONS + list(transitions),
            initial="start",
            auto_transitions=False,  # Only explicit transitions
            send_event=True,  # Pass EventData to callbacks
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        """Callback after any state transition."""
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        logger.info(f"[FSM] {self.workflow}: {from_state} -> {to_state} ({trigger})")
        self.history.append(trigger)

    @property
    def is_terminal(self) -> bool:
        return self.state in self.terminal

    def require_terminal(self) -> str:
        """Return the terminal state, or fail loudly if the run stopped early."""
        if not self.is_terminal:
            raise RuntimeError(
                f"{self.workflow} workflow ended in non-terminal state '{self.state}' "
                f"after: {' -> '.join(self.history) or '(no steps)'}"
            )
        return self.state

"""Workflow states for the deployment wizard.

The wizard is a strictly linear machine: every step either moves the session
forward or ends it in one of the terminal states. Keeping the states in the
domain layer lets the orchestrator, the CLI and the tests share a single
source of truth.
"""

from __future__ import annotations

from enum import Enum


class WorkflowState(str, Enum):
    """Ordered states of a wizard run, plus the terminal outcomes."""

    START = "start"
    DEPS_CHECKED = "deps_checked"
    CREDENTIAL_READY = "credential_ready"
    ACCOUNT_RESOLVED = "account_resolved"
    NAME_ENTERED = "name_entered"
    SUBDOMAIN_RESOLVED = "subdomain_resolved"
    CONFIRMED = "confirmed"
    DEPLOYED = "deployed"
    DONE = "done"

    CANCELLED_BY_USER = "cancelled_by_user"
    ABORTED_WITH_ERROR = "aborted_with_error"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL

    def order(self) -> int:
        """Position in the linear happy path (terminal outcomes sort last)."""

        try:
            return _HAPPY_PATH.index(self)
        except ValueError:
            return len(_HAPPY_PATH)

    def exit_code(self) -> int:
        """Process exit status for a run that stopped in this state."""

        return 1 if self is WorkflowState.ABORTED_WITH_ERROR else 0


_HAPPY_PATH: tuple[WorkflowState, ...] = (
    WorkflowState.START,
    WorkflowState.DEPS_CHECKED,
    WorkflowState.CREDENTIAL_READY,
    WorkflowState.ACCOUNT_RESOLVED,
    WorkflowState.NAME_ENTERED,
    WorkflowState.SUBDOMAIN_RESOLVED,
    WorkflowState.CONFIRMED,
    WorkflowState.DEPLOYED,
    WorkflowState.DONE,
)

_TERMINAL = frozenset(
    {WorkflowState.DONE, WorkflowState.CANCELLED_BY_USER, WorkflowState.ABORTED_WITH_ERROR}
)

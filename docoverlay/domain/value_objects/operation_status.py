"""
OperationStatus value object

Represents one observation of a long-running remote analysis operation.
Every poll tick produces a new immutable snapshot; transitions are validated
so a snapshot chain can never leave a terminal state.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class OperationState(str, Enum):
    """Lifecycle states of a remote analysis operation."""
    SUBMITTED = "submitted"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @classmethod
    def from_remote(cls, remote_status: Optional[str]) -> OperationState:
        """
        Translate the engine's status string.

        Examples:
            >>> OperationState.from_remote("notStarted")
            <OperationState.SUBMITTED: 'submitted'>
            >>> OperationState.from_remote("canceled")
            <OperationState.FAILED: 'failed'>

        Raises:
            ValueError: If the status is not one the engine documents
        """
        key = (remote_status or "").replace("-", "").replace("_", "").lower()
        try:
            return _REMOTE_STATES[key]
        except KeyError:
            raise ValueError(f"Unknown remote operation status: {remote_status!r}") from None


_REMOTE_STATES = {
    "notstarted": OperationState.SUBMITTED,
    "submitted": OperationState.SUBMITTED,
    "running": OperationState.RUNNING,
    "succeeded": OperationState.SUCCEEDED,
    "failed": OperationState.FAILED,
    "canceled": OperationState.FAILED,
    "cancelled": OperationState.FAILED,
}

_VALID_TRANSITIONS = {
    OperationState.SUBMITTED: {OperationState.RUNNING, OperationState.SUCCEEDED, OperationState.FAILED},
    OperationState.RUNNING: {OperationState.RUNNING, OperationState.SUCCEEDED, OperationState.FAILED},
    OperationState.SUCCEEDED: set(),  # Terminal state
    OperationState.FAILED: set(),  # Terminal state
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OperationStatus:
    """
    Immutable snapshot of a remote operation.

    Attributes:
        state: Current lifecycle state
        operation_handle: Opaque handle returned on submission
        attempt: 1-based submit-and-poll attempt this snapshot belongs to
        poll_count: Number of status fetches performed in this attempt
        percent_completed: Progress reported by the engine, if any
        error_message: Remote error message for failed operations
    """
    state: OperationState
    operation_handle: str
    attempt: int = 1
    poll_count: int = 0
    percent_completed: Optional[float] = None
    error_message: Optional[str] = None
    observed_at: datetime = field(default_factory=_utcnow, compare=False)

    @classmethod
    def submitted(cls, operation_handle: str, attempt: int = 1) -> OperationStatus:
        return cls(state=OperationState.SUBMITTED, operation_handle=operation_handle, attempt=attempt)

    def can_transition_to(self, new_state: OperationState) -> bool:
        """
        Check if transition to new state is valid.

        Valid transitions:
        - SUBMITTED → RUNNING, SUCCEEDED, FAILED
        - RUNNING → RUNNING (another tick), SUCCEEDED, FAILED
        - SUCCEEDED, FAILED → (none - terminal)
        """
        return new_state in _VALID_TRANSITIONS[self.state]

    def advance(
        self,
        new_state: OperationState,
        *,
        percent_completed: Optional[float] = None,
        error_message: Optional[str] = None,
    ) -> OperationStatus:
        """
        Produce the snapshot observed on the next poll tick.

        ``SUBMITTED → SUBMITTED`` is treated as another tick of an operation the
        engine has not started yet.

        Raises:
            ValueError: If the transition is invalid
        """
        if not (new_state == self.state == OperationState.SUBMITTED) and not self.can_transition_to(new_state):
            raise ValueError(
                f"Invalid state transition from {self.state.value} to {new_state.value}"
            )
        return OperationStatus(
            state=new_state,
            operation_handle=self.operation_handle,
            attempt=self.attempt,
            poll_count=self.poll_count + 1,
            percent_completed=percent_completed if percent_completed is not None else self.percent_completed,
            error_message=error_message,
        )

    def is_terminal(self) -> bool:
        return self.state in {OperationState.SUCCEEDED, OperationState.FAILED}

    def is_active(self) -> bool:
        return self.state in {OperationState.SUBMITTED, OperationState.RUNNING}

    def __str__(self) -> str:
        if self.error_message:
            return f"{self.state.value} (attempt {self.attempt}): {self.error_message}"
        return f"{self.state.value} (attempt {self.attempt}, poll {self.poll_count})"

"""Generic state machine for model status transitions.

Example:
    sm = create_upload_state_machine("pending")

    if sm.can_transition(UploadStatus.UPLOADING):
        sm.transition(UploadStatus.UPLOADING)

    sm.transition_to(UploadStatus.COMPLETED)
"""

from enum import Enum
from typing import Generic, TypeVar

from vodtube.core.exceptions import VodTubeError

T = TypeVar("T", bound=str | Enum)

TransitionMap = dict[T, list[T]]


class InvalidTransitionError(VodTubeError):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, current: T, target: T, allowed: list[T] | None = None):
        self.current = current
        self.target = target
        self.allowed = allowed or []
        self.error_code = "INVALID_TRANSITION"
        allowed_str = ", ".join(str(s) for s in self.allowed) if self.allowed else "none"
        super().__init__(
            message=f"Invalid transition from '{current}' to '{target}'. "
            f"Allowed transitions: {allowed_str}",
            context={
                "current": str(current),
                "target": str(target),
                "allowed": [str(s) for s in self.allowed],
            },
        )


class StateMachine(Generic[T]):
    """Generic state machine for status transitions.

    Attributes:
        current: Current state
        transitions: Map of allowed transitions from each state
    """

    def __init__(self, initial: T, transitions: TransitionMap[T]):
        """Initialize state machine.

        Args:
            initial: Initial state
            transitions: Map of state -> list of allowed target states
        """
        self._current = initial
        self._transitions = transitions

    @property
    def current(self) -> T:
        """Get current state."""
        return self._current

    @property
    def allowed_transitions(self) -> list[T]:
        """Get list of states we can transition to from current state."""
        return self._transitions.get(self._current, [])

    def can_transition(self, target: T) -> bool:
        """Check if transition to target state is allowed."""
        return target in self.allowed_transitions

    def transition(self, target: T) -> None:
        """Perform transition to target state.

        Args:
            target: Target state

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(
                current=self._current,
                target=target,
                allowed=self.allowed_transitions,
            )
        self._current = target

    def transition_to(self, target: T) -> T:
        """Perform transition and return new state.

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        self.transition(target)
        return self._current

    def __str__(self) -> str:
        return f"StateMachine(current={self._current})"

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r}, allowed={self.allowed_transitions!r})"


# ============================================
# Upload transitions
# ============================================


def get_upload_transitions() -> TransitionMap:
    """Get transition map for UploadStatus."""
    from vodtube.models.youtube_upload import UploadStatus

    return {
        UploadStatus.PENDING: [UploadStatus.UPLOADING],
        UploadStatus.UPLOADING: [
            UploadStatus.COMPLETED,
            UploadStatus.FAILED,
            UploadStatus.UPLOADING,  # Re-entry after an interrupted attempt
            UploadStatus.PENDING,  # Manual retry reset
        ],
        UploadStatus.FAILED: [UploadStatus.UPLOADING, UploadStatus.PENDING],
        UploadStatus.COMPLETED: [],  # Terminal state
    }


def create_upload_state_machine(initial_status: str | None = None) -> StateMachine:
    """Create a state machine for YouTubeUpload status.

    Args:
        initial_status: Initial status (default: PENDING)

    Returns:
        Configured StateMachine for YouTubeUpload
    """
    from vodtube.models.youtube_upload import UploadStatus

    initial = UploadStatus(initial_status) if initial_status else UploadStatus.PENDING
    return StateMachine(initial, get_upload_transitions())

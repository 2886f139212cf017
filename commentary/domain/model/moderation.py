"""Moderation state machine.

The transition table is the single source of truth for which moderation
actions are legal from which state. Anything not listed is rejected with
InvalidStateError, so e.g. permanent deletion cannot skip the trash.
"""

from typing import NamedTuple

from commentary.domain.error import InvalidStateError
from commentary.domain.value import ModerationAction, ModerationState


class Transition(NamedTuple):
    """Outcome of applying an action to a state."""

    source: ModerationState
    target: ModerationState
    changed: bool


TRANSITIONS: dict[tuple[ModerationState, ModerationAction], ModerationState] = {
    (ModerationState.PENDING, ModerationAction.APPROVE): ModerationState.APPROVED,
    (ModerationState.APPROVED, ModerationAction.APPROVE): ModerationState.APPROVED,
    (ModerationState.APPROVED, ModerationAction.REJECT): ModerationState.PENDING,
    (ModerationState.PENDING, ModerationAction.REJECT): ModerationState.PENDING,
    (ModerationState.PENDING, ModerationAction.SOFT_DELETE): ModerationState.TRASHED,
    (ModerationState.APPROVED, ModerationAction.SOFT_DELETE): ModerationState.TRASHED,
    # Restoring never re-publishes: the comment goes back to review
    (ModerationState.TRASHED, ModerationAction.RESTORE): ModerationState.PENDING,
    (ModerationState.TRASHED, ModerationAction.PERMANENT_DELETE): ModerationState.PURGED,
}


def transition(state: ModerationState, action: ModerationAction) -> Transition:
    """Resolve the target state for an action.

    Args:
        state: Current state
        action: Requested action

    Returns:
        Transition; ``changed`` is False for idempotent no-ops

    Raises:
        InvalidStateError: If the action is not allowed from ``state``
    """
    target = TRANSITIONS.get((state, action))
    if target is None:
        raise InvalidStateError(
            f"Cannot {action.value.replace('_', ' ')} a comment in state {state.value}"
        )
    return Transition(source=state, target=target, changed=target != state)


def is_allowed(state: ModerationState, action: ModerationAction) -> bool:
    """Check whether an action is legal from a state."""
    return (state, action) in TRANSITIONS

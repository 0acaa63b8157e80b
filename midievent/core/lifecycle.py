"""
Event Lifecycle State Machine.

Containers read an event's lifecycle state to decide whether its part needs
re-rendering.  Event mutations go through advance().  The container that
flushed an event owns the tag afterwards and may write ``MIDIEvent.state``
itself, to any state but NEW; leaving NEW that way is what lets later
move/transpose calls register.

States:
    NEW        — Created, not yet observed by a container
    MOVED      — Ticks changed after the first observation
    TRANSPOSED — Pitch changed after the first observation
    REMOVED    — Detached from part/track/song by reset()

Invariants:
    1. NEW is only ever the initial state; nothing transitions back to it.
    2. move/transpose keep NEW until a container has observed the event.
    3. REMOVED is applied unconditionally, including from NEW.
    4. MOVED/TRANSPOSED/REMOVED move freely between each other.
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    """Canonical event lifecycle states."""

    NEW = "new"
    MOVED = "moved"
    TRANSPOSED = "transposed"
    REMOVED = "removed"


# Targets that leave a NEW event untouched.
_STICKY_FROM_NEW: frozenset[LifecycleState] = frozenset({
    LifecycleState.MOVED,
    LifecycleState.TRANSPOSED,
})


class InvalidTransitionError(Exception):
    """Raised when a state transition violates the state machine."""

    def __init__(self, from_state: LifecycleState, to_state: LifecycleState):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid transition: {from_state.value} → {to_state.value}"
        )


def advance(
    current: LifecycleState,
    target: LifecycleState,
) -> LifecycleState:
    """
    Return the state an event ends up in after an operation aiming at ``target``.

    Raises InvalidTransitionError if ``target`` is NEW.
    """
    if target is LifecycleState.NEW:
        raise InvalidTransitionError(current, target)
    if current is LifecycleState.NEW and target in _STICKY_FROM_NEW:
        return current
    return target

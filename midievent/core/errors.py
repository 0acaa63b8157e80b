"""Exception types raised by the MIDI event model."""
from __future__ import annotations


class MIDIEventError(Exception):
    """Base exception for event model errors."""


class InvalidArgumentsError(MIDIEventError, ValueError):
    """Raised when required fields are missing, non-numeric or out of range.

    The event is left exactly as it was before the call; constructors raise
    before any field is assigned.
    """


class InvalidOperationError(MIDIEventError, TypeError):
    """Raised when an operation does not apply to the event's type.

    Example: transposing a control-change event.
    """

    def __init__(
        self,
        operation: str,
        event_type: int | None,
        reason: str = "only applies to note on and note off events",
    ) -> None:
        self.operation = operation
        self.event_type = event_type
        type_repr = "none" if event_type is None else f"0x{event_type:02X}"
        super().__init__(f"{operation} {reason} (type {type_repr})")

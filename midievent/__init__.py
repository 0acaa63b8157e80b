"""midievent — MIDI event decoding and a mutable event model.

Quick start::

    from midievent import create_midi_event

    event = create_midi_event(0, 0x90, 60, 100)
    event.transpose(12)
    event.note_name  # "C5"
"""

from midievent.core.errors import (
    InvalidArgumentsError,
    InvalidOperationError,
    MIDIEventError,
)
from midievent.core.event import MIDIEvent, create_midi_event
from midievent.core.identity import EventCounter, use_counter
from midievent.core.inputs import Hertz, MusicalPosition, Semitones, TickPosition
from midievent.core.lifecycle import LifecycleState
from midievent.core.messages import midi_event_from_message, midi_event_to_message
from midievent.core.notes import Note, NoteResolver

__all__ = [
    "EventCounter",
    "Hertz",
    "InvalidArgumentsError",
    "InvalidOperationError",
    "LifecycleState",
    "MIDIEvent",
    "MIDIEventError",
    "MusicalPosition",
    "Note",
    "NoteResolver",
    "Semitones",
    "TickPosition",
    "create_midi_event",
    "midi_event_from_message",
    "midi_event_to_message",
    "use_counter",
]

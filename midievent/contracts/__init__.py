"""MIDI range aliases and event type codes."""

from midievent.contracts.midi_types import (
    NOTE_TYPES,
    EventType,
    MidiChannel,
    MidiPitch,
    MidiStatusByte,
    Ticks,
    clamp_pitch,
    is_channel_voice,
)

__all__ = [
    "NOTE_TYPES",
    "EventType",
    "MidiChannel",
    "MidiPitch",
    "MidiStatusByte",
    "Ticks",
    "clamp_pitch",
    "is_channel_voice",
]

"""Canonical MIDI primitive type aliases and event type codes.

Single source of truth for the value ranges and type codes used by the
event model.

MIDI ranges
-----------
+-------------------+-------------------+----------------------------------+
| Primitive         | Range             | Notes                            |
+===================+===================+==================================+
| Status byte       | 0 – 255           | High nibble = command            |
| Pitch             | 0 – 127           | C-1=0, Middle C=60, G9=127       |
| Velocity          | 0 – 127           | 0 on note-on = note-off          |
| Channel           | 1 – 16            | 1-based; 0 = detached from track |
| Ticks             | any int           | Relative moves may go negative   |
+-------------------+-------------------+----------------------------------+
"""
from __future__ import annotations

import enum
from typing import Annotated

from pydantic import Field


# ── MIDI byte values ─────────────────────────────────────────────────────────

MidiStatusByte = Annotated[int, Field(ge=0, le=255)]
"""Raw status byte. Channel-voice messages carry the channel in the low nibble."""

MidiPitch = Annotated[int, Field(ge=0, le=127)]
"""MIDI note number. C-1 = 0, Middle C = 60, G9 = 127."""

MidiChannel = Annotated[int, Field(ge=0, le=16)]
"""One-based MIDI channel. 0 only after an event is detached from its track."""

Ticks = Annotated[int, Field(ge=0)]
"""Absolute tick position as reported by a container."""

PITCH_MIN = 0
PITCH_MAX = 127


# ── Event type codes ─────────────────────────────────────────────────────────


class EventType(enum.IntEnum):
    """Normalised event type codes.

    Channel-voice codes are the status high nibble scaled to a byte; meta
    codes are the raw meta type byte.  ``MIDIEvent.type`` stays a plain
    ``int`` so unrecognised codes survive decoding.
    """

    NO_OP = 0x00
    END_OF_TRACK = 0x2F
    TEMPO = 0x51
    TIME_SIGNATURE = 0x58
    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    CHANNEL_PRESSURE = 0xD0
    PITCH_BEND = 0xE0


CHANNEL_VOICE_MIN = EventType.NOTE_OFF
CHANNEL_VOICE_MAX = EventType.PITCH_BEND

NOTE_TYPES: frozenset[int] = frozenset({EventType.NOTE_OFF, EventType.NOTE_ON})


def is_channel_voice(type_code: int) -> bool:
    """True when ``type_code`` is a scaled channel-voice command (0x80–0xE0)."""
    return CHANNEL_VOICE_MIN <= type_code <= CHANNEL_VOICE_MAX


def clamp_pitch(pitch: int) -> int:
    """Clamp a note number into the 7-bit MIDI range."""
    return max(PITCH_MIN, min(PITCH_MAX, pitch))

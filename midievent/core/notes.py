"""Note name, octave and frequency derivation from a MIDI pitch.

Conventions:
- Middle C (60) is ``C4``; pitch 0 is ``C-1`` and pitch 127 is ``G9``.
- Frequency is equal-tempered relative to A4 (pitch 69).
- Accidentals are spelled with sharps or flats per ``note_name_mode``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import TypeAdapter, ValidationError

from midievent.config import Settings, get_settings
from midievent.contracts.midi_types import MidiPitch
from midievent.core.errors import InvalidArgumentsError

logger = logging.getLogger(__name__)

NoteNameMode = Literal["sharp", "flat"]

# Preferred name for each semitone (0=C … 11=B).
_SHARP_NAMES: list[str] = [
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"
]
_FLAT_NAMES: list[str] = [
    "C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"
]

_A4_PITCH = 69

_PITCH_ADAPTER: TypeAdapter[int] = TypeAdapter(MidiPitch)


@dataclass(frozen=True)
class Note:
    """Resolved snapshot of a single MIDI pitch."""

    name: str
    """Pitch-class name without octave, e.g. ``"C#"``."""

    full_name: str
    """Name with octave, e.g. ``"C#4"``."""

    number: int
    """MIDI note number (0–127)."""

    octave: int
    """Scientific pitch octave; middle C is octave 4."""

    frequency: float
    """Equal-tempered frequency in hertz."""


class NoteResolver:
    """Derive :class:`Note` snapshots from numeric pitches.

    Pure: the same pitch always resolves to an equal ``Note`` for a given
    reference frequency and spelling mode.
    """

    def __init__(
        self,
        reference_hz: float = 440.0,
        note_name_mode: NoteNameMode = "sharp",
    ) -> None:
        if reference_hz <= 0:
            raise InvalidArgumentsError(f"reference_hz must be positive, got {reference_hz!r}")
        self.reference_hz = reference_hz
        self.note_name_mode = note_name_mode
        self._names = _FLAT_NAMES if note_name_mode == "flat" else _SHARP_NAMES

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "NoteResolver":
        settings = settings or get_settings()
        return cls(
            reference_hz=settings.pitch_reference_hz,
            note_name_mode=settings.note_name_mode,
        )

    def from_pitch(self, pitch: int) -> Note:
        """Resolve ``pitch`` to a :class:`Note`.

        Raises:
            InvalidArgumentsError: When ``pitch`` is not an integer in 0–127.
        """
        try:
            pitch = _PITCH_ADAPTER.validate_python(pitch, strict=True)
        except ValidationError as exc:
            raise InvalidArgumentsError(
                f"pitch must be an integer in [0, 127], got {pitch!r}"
            ) from exc
        name = self._names[pitch % 12]
        octave = pitch // 12 - 1
        return Note(
            name=name,
            full_name=f"{name}{octave}",
            number=pitch,
            octave=octave,
            frequency=self.frequency(pitch),
        )

    def frequency(self, pitch: int) -> float:
        """Equal-tempered frequency for ``pitch`` in hertz."""
        return self.reference_hz * 2 ** ((pitch - _A4_PITCH) / 12)


_default_resolver: Optional[NoteResolver] = None


def get_note_resolver() -> NoteResolver:
    """Return the process-wide resolver built from settings."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = NoteResolver.from_settings()
        logger.debug(
            "Note resolver ready: A4=%.2f Hz, %s spelling",
            _default_resolver.reference_hz,
            _default_resolver.note_name_mode,
        )
    return _default_resolver


def reset_note_resolver() -> None:
    """Drop the cached resolver so the next lookup re-reads settings."""
    global _default_resolver
    _default_resolver = None

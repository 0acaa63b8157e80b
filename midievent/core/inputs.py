"""Boundary coercion for event constructor and mutation arguments.

Callers may pass loose shapes (variadic numbers, wrapped lists, tagged
``("semi", 3)`` pairs).  Each shape is resolved here exactly once into a
typed value; ``MIDIEvent`` methods only ever see the typed forms:

- :class:`EventFields` — validated ``(ticks, status, data1, data2, channel)``
- :data:`PitchInput` — :class:`Semitones` or :class:`Hertz`
- :data:`Position` — :class:`TickPosition` or :class:`MusicalPosition`
"""
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from midievent.contracts.midi_types import MidiChannel, MidiStatusByte
from midievent.core.errors import InvalidArgumentsError

Number = Union[StrictInt, StrictFloat]

# Only the first five positions carry meaning; extras are ignored.
_FIELD_NAMES = ("ticks", "status", "data1", "data2", "channel")

_SEMITONE_UNITS = frozenset({"semi", "semitone"})
_HERTZ_UNITS = frozenset({"hertz"})

_STATUS_ADAPTER: TypeAdapter[int] = TypeAdapter(MidiStatusByte)
_CHANNEL_ADAPTER: TypeAdapter[int] = TypeAdapter(MidiChannel)


def is_number(value: object) -> bool:
    """True for finite ints and floats; bools and strings are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and not math.isfinite(value))


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


# ---------------------------------------------------------------------------
# Constructor fields
# ---------------------------------------------------------------------------


class EventFields(BaseModel):
    """Validated raw fields of a MIDI event.

    ``ticks``, ``status`` and ``channel`` are truncated to integers; the
    status must then be a byte and the channel 0–16.  The data bytes keep
    their numeric type because meta events (e.g. tempo) may carry fractional
    values.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    ticks: Number
    status: Number
    data1: Optional[Number] = None
    data2: Optional[Number] = None
    channel: Optional[Number] = None

    @field_validator("ticks")
    @classmethod
    def _truncate(cls, v: float) -> int:
        return int(v)

    @field_validator("status")
    @classmethod
    def _status_byte(cls, v: float) -> int:
        return _STATUS_ADAPTER.validate_python(int(v))

    @field_validator("channel")
    @classmethod
    def _channel(cls, v: Optional[float]) -> Optional[int]:
        return None if v is None else _CHANNEL_ADAPTER.validate_python(int(v))

    @classmethod
    def from_args(cls, args: Sequence[object]) -> "EventFields":
        """Build fields from variadic or wrapped constructor arguments.

        Accepts ``(ticks, status, ...)``, ``([ticks, status, ...],)`` and
        ``([[ticks, status, ...]],)``.

        Raises:
            InvalidArgumentsError: When fewer than two fields are supplied or
                any supplied field is not a finite number.
        """
        values = unwrap_args(args)
        if len(values) < 2:
            raise InvalidArgumentsError(
                "please provide numbers for ticks, type, data1 and optionally "
                f"for data2 and channel (got {len(values)} field(s))"
            )
        raw = dict(zip(_FIELD_NAMES, values[:5]))
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise InvalidArgumentsError(
                "please provide numbers for ticks, type, data1 and optionally "
                f"for data2 and channel: {exc.errors(include_url=False)}"
            ) from exc


def unwrap_args(args: Sequence[object]) -> Sequence[object]:
    """Strip the optional list wrapping around constructor arguments."""
    if len(args) == 1 and _is_sequence(args[0]):
        args = args[0]  # type: ignore[assignment]
        if args and _is_sequence(args[0]):
            args = args[0]  # type: ignore[assignment]
    return args


# ---------------------------------------------------------------------------
# Pitch input
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Semitones:
    """A pitch amount in semitones (relative for transpose, absolute for set_pitch)."""

    value: int


@dataclass(frozen=True)
class Hertz:
    """A pitch amount in hertz.  Accepted but not converted to semitones."""

    value: float


PitchInput = Union[Semitones, Hertz]


def coerce_pitch_input(value: object) -> PitchInput:
    """Resolve a transpose/set_pitch argument to a :data:`PitchInput`.

    Accepts a number (truncated to ``int``), a ``Semitones``/``Hertz``
    instance, or a tagged pair ``(unit, value)`` with unit ``"semi"``,
    ``"semitone"`` or ``"hertz"``.

    Raises:
        InvalidArgumentsError: For any other shape or a non-numeric value.
    """
    if isinstance(value, (Semitones, Hertz)):
        return value
    if is_number(value):
        return Semitones(int(value))  # type: ignore[arg-type]
    if _is_sequence(value) and len(value) == 2:  # type: ignore[arg-type]
        unit, amount = value  # type: ignore[misc]
        if not is_number(amount):
            raise InvalidArgumentsError(f"please provide a number, got {amount!r}")
        if unit in _SEMITONE_UNITS:
            return Semitones(int(amount))
        if unit in _HERTZ_UNITS:
            return Hertz(float(amount))
        raise InvalidArgumentsError(
            f"Unknown pitch unit {unit!r}. Valid units: hertz, semi, semitone"
        )
    raise InvalidArgumentsError(f"please provide a number, got {value!r}")


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TickPosition:
    """An absolute tick position; needs no container to resolve."""

    ticks: int


@dataclass(frozen=True)
class MusicalPosition:
    """Any other tagged position, e.g. ``("barsbeats", 4, 1, 1, 0)``.

    Resolved by the song the event belongs to.
    """

    args: tuple[object, ...]


Position = Union[TickPosition, MusicalPosition]


def coerce_position(*position: object) -> Position:
    """Resolve ``move_to`` arguments to a :data:`Position`.

    ``("ticks", n)`` with numeric ``n`` — given flat or wrapped in one list —
    becomes a ``TickPosition``; everything else is a ``MusicalPosition``.
    """
    if len(position) == 1 and isinstance(position[0], (TickPosition, MusicalPosition)):
        return position[0]
    if len(position) == 1 and _is_sequence(position[0]):
        position = tuple(position[0])  # type: ignore[arg-type]
    if len(position) >= 2 and position[0] == "ticks" and is_number(position[1]):
        return TickPosition(int(position[1]))  # type: ignore[arg-type]
    return MusicalPosition(tuple(position))

"""MIDIEvent — one timed MIDI message with decoded, mutable content.

Construction decodes the status byte once:

- Channel-voice messages (status high nibble 0x8–0xE): ``type`` is the
  command nibble scaled to a byte (0x80, 0x90, …) and ``channel`` is the
  low nibble converted to 1-based.
- Meta/system messages: ``type`` is the raw status value and ``channel`` is
  the fifth field (or the configured default).
- Note-on with velocity 0 is reclassified as note-off at decode time.

Mutations (``transpose``, ``set_pitch``, ``move``, ``move_to``, ``reset``)
re-derive dependent fields, advance the lifecycle state, and ask the
attached part to re-flush via ``update()``.

``sort_index`` is ``type + ticks``, so at equal ticks a note-off (0x80)
sorts before a note-on (0x90).

Example::

    event = create_midi_event(120, 0x90, 60, 100)      # middle C, velocity 100
    event = create_midi_event([120, 0x90, 60, 100])    # same, wrapped
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import mido

from midievent.config import get_settings
from midievent.contracts.midi_types import (
    NOTE_TYPES,
    EventType,
    clamp_pitch,
    is_channel_voice,
)
from midievent.core.errors import InvalidArgumentsError, InvalidOperationError
from midievent.core.identity import EventCounter, get_event_counter
from midievent.core.inputs import (
    EventFields,
    Hertz,
    PitchInput,
    TickPosition,
    coerce_pitch_input,
    coerce_position,
    is_number,
)
from midievent.core.lifecycle import LifecycleState, advance
from midievent.core.notes import Note, NoteResolver, get_note_resolver
from midievent.core.ports import Part, PlaybackHandle, ResolvedPosition, Song

logger = logging.getLogger(__name__)

# Never copied by clone(): fresh identity, detached from containers and playback.
_CLONE_EXCLUDED: frozenset[str] = frozenset({
    "id",
    "event_number",
    "song",
    "track",
    "track_id",
    "part",
    "part_id",
    "midi_note",
})

_RECOGNISED_TYPES: frozenset[int] = frozenset(EventType)


class MIDIEvent:
    """A single MIDI message positioned in ticks.

    Accepts ``(ticks, status, data1, data2, channel)`` as separate arguments
    or as one list (optionally wrapped once more).  ``data2`` and ``channel``
    are optional.  With no arguments a blank event is created (used by
    ``clone``).

    Raises:
        InvalidArgumentsError: When the fields are missing or non-numeric.
            Nothing is assigned in that case.
    """

    def __init__(
        self,
        *args: Any,
        counter: Optional[EventCounter] = None,
        resolver: Optional[NoteResolver] = None,
    ) -> None:
        self._counter = counter or get_event_counter()
        self._resolver = resolver or get_note_resolver()

        decoded: dict[str, Any] = {}
        pre_parsed = len(args) == 1 and isinstance(args[0], (mido.Message, mido.MetaMessage))
        if args and not pre_parsed:
            decoded = self._decode(EventFields.from_args(args))

        self.id, self.event_number = self._counter.next_identity()

        self.ticks: Optional[int] = None
        self.status: Optional[int] = None
        self.type: Optional[int] = None
        self.command: Optional[int] = None
        self.channel: Optional[int] = None
        self.data1: Optional[float] = None
        self.data2: Optional[float] = None

        self.note: Optional[Note] = None
        self.note_name: Optional[str] = None
        self.note_number: Optional[int] = None
        self.octave: Optional[int] = None
        self.frequency: Optional[float] = None
        self.velocity: Optional[float] = None

        self.bpm: Optional[float] = None
        self.nominator: Optional[float] = None
        self.denominator: Optional[float] = None
        self.controller_type: Optional[float] = None
        self.controller_value: Optional[float] = None
        self.program_number: Optional[float] = None

        self.muted = False
        self.state = LifecycleState.NEW

        self.song: Optional[Song] = None
        self.track: Optional[object] = None
        self.track_id: Optional[str] = None
        self.part: Optional[Part] = None
        self.part_id: Optional[str] = None
        self.midi_note: Optional[PlaybackHandle] = None

        if pre_parsed:
            logger.info(
                "ℹ️ %s is already parsed; decode it with midi_event_from_message()",
                type(args[0]).__name__,
            )
            return
        vars(self).update(decoded)

    # ── Decoding ────────────────────────────────────────────────────────────

    def _decode(self, fields: EventFields) -> dict[str, Any]:
        """Decode ``fields`` into attribute values without touching ``self``."""
        status = fields.status
        decoded: dict[str, Any] = {"ticks": fields.ticks, "status": status}

        type_code = (status >> 4) * 16
        if is_channel_voice(type_code):
            decoded["command"] = type_code
            decoded["channel"] = (status & 0xF) + 1
        else:
            type_code = status
            decoded["channel"] = fields.channel or get_settings().default_meta_channel

        data1, data2 = fields.data1, fields.data2

        if type_code == EventType.NO_OP or type_code == EventType.END_OF_TRACK:
            pass
        elif type_code == EventType.NOTE_OFF:
            decoded.update(self._note_fields(data1))
            decoded["data2"] = 0
            decoded["velocity"] = 0
        elif type_code == EventType.NOTE_ON:
            if data2 == 0:
                type_code = EventType.NOTE_OFF
            decoded.update(self._note_fields(data1))
            decoded["data2"] = data2
            decoded["velocity"] = data2
        elif type_code == EventType.TEMPO:
            decoded["bpm"] = data1
        elif type_code == EventType.TIME_SIGNATURE:
            decoded["nominator"] = data1
            decoded["denominator"] = data2
        elif type_code == EventType.CONTROL_CHANGE:
            decoded.update(
                data1=data1, data2=data2, controller_type=data1, controller_value=data2
            )
        elif type_code == EventType.PROGRAM_CHANGE:
            decoded.update(data1=data1, program_number=data1)
        elif type_code in (EventType.CHANNEL_PRESSURE, EventType.PITCH_BEND):
            decoded.update(data1=data1, data2=data2)

        if type_code not in _RECOGNISED_TYPES:
            logger.warning(
                "⚠️ Status 0x%02X is not a recognised type of MIDI event; "
                "keeping generic fields only",
                status,
            )

        decoded["type"] = int(type_code)
        return decoded

    def _note_fields(self, data1: Optional[float]) -> dict[str, Any]:
        if data1 is None:
            raise InvalidArgumentsError("note on and note off events need a note number (data1)")
        pitch = int(data1)
        note = self._resolver.from_pitch(pitch)
        return {
            "data1": pitch,
            "note": note,
            "note_name": note.full_name,
            "note_number": note.number,
            "octave": note.octave,
            "frequency": note.frequency,
        }

    # ── Derived fields ──────────────────────────────────────────────────────

    @property
    def sort_index(self) -> Optional[int]:
        """``type + ticks``; note-off sorts before note-on at equal ticks."""
        if self.type is None or self.ticks is None:
            return None
        return self.type + self.ticks

    @property
    def is_note(self) -> bool:
        return self.type in NOTE_TYPES

    # ── Mutations ───────────────────────────────────────────────────────────

    def transpose(self, semi: Any) -> None:
        """Shift the pitch by ``semi`` semitones, clamped to 0–127.

        ``semi`` may be an int, ``Semitones``, ``Hertz`` or a tagged pair
        such as ``("semi", -12)``.  Hertz amounts are accepted but leave the
        pitch unchanged.

        Raises:
            InvalidOperationError: When the event is not a note event.
            InvalidArgumentsError: When ``semi`` is not a recognised amount.
        """
        self._require_note("transpose")
        amount = self._pitch_input("transpose", semi)
        if isinstance(amount, Hertz):
            logger.warning("⚠️ Hertz conversion is not supported; pitch of %s left at %s", self.id, self.data1)
            pitch = int(self.data1)  # type: ignore[arg-type]
        else:
            pitch = clamp_pitch(int(self.data1) + amount.value)  # type: ignore[arg-type]
        self._apply_pitch(pitch)
        self._advance(LifecycleState.TRANSPOSED)
        self.update()

    def set_pitch(self, pitch: Any) -> None:
        """Set the note number absolutely.

        Takes the same input shapes as :meth:`transpose`.  No clamping is
        applied: pitches outside 0–127 are rejected.

        Raises:
            InvalidOperationError: When the event is not a note event.
            InvalidArgumentsError: When ``pitch`` is not a valid note number.
        """
        self._require_note("set_pitch")
        amount = self._pitch_input("set_pitch", pitch)
        if isinstance(amount, Hertz):
            logger.warning("⚠️ Hertz conversion is not supported; pitch of %s left at %s", self.id, self.data1)
            new_pitch = int(self.data1)  # type: ignore[arg-type]
        else:
            new_pitch = amount.value
        try:
            self._apply_pitch(new_pitch)
        except InvalidArgumentsError as exc:
            logger.error("❌ set_pitch rejected for %s: %s", self.id, exc)
            raise
        self._advance(LifecycleState.TRANSPOSED)
        self.update()

    def move(self, ticks: Any) -> None:
        """Move the event by ``ticks`` (truncated to an int).

        The duration of an attached playback handle is not recomputed.

        Raises:
            InvalidArgumentsError: When ``ticks`` is not a number.
        """
        if not is_number(ticks):
            logger.error("❌ move rejected for %s: please provide a number, got %r", self.id, ticks)
            raise InvalidArgumentsError(f"please provide a number, got {ticks!r}")
        self.ticks = (self.ticks or 0) + int(ticks)
        self._advance(LifecycleState.MOVED)
        self.update()

    def move_to(self, *position: Any) -> None:
        """Move the event to an absolute position.

        ``move_to("ticks", 240)`` (or ``move_to(["ticks", 240])``) sets ticks
        directly.  Any other position is resolved by the attached song; when
        there is no song, or the song cannot resolve it, the failure is
        logged and ticks stay unchanged.
        """
        target = coerce_position(*position)
        if isinstance(target, TickPosition):
            self.ticks = target.ticks
        elif self.song is None:
            logger.error(
                "❌ %s has not been added to a song yet; you can only move to ticks values",
                self.id,
            )
        else:
            resolved = self._resolve_position(target.args)
            if resolved is not None:
                self.ticks = resolved.ticks
        self._advance(LifecycleState.MOVED)
        self.update()

    def reset(self, from_part: bool = True, from_track: bool = True, from_song: bool = True) -> None:
        """Detach the event from its containers and mark it removed."""
        if from_part:
            self.part = None
            self.part_id = None
        if from_track:
            self.track = None
            self.track_id = None
            self.channel = 0
        if from_song:
            self.song = None
        self.state = advance(self.state, LifecycleState.REMOVED)
        self.update()

    def clone(self) -> "MIDIEvent":
        """Return a detached copy with a fresh ``id`` and ``event_number``."""
        event = MIDIEvent(counter=self._counter, resolver=self._resolver)
        for name, value in vars(self).items():
            if name not in _CLONE_EXCLUDED:
                setattr(event, name, value)
        return event

    def update(self) -> None:
        """Mark the attached part as needing a re-flush."""
        if self.part is not None:
            self.part.mark_needs_update()

    # ── Helpers ─────────────────────────────────────────────────────────────

    def _require_note(self, operation: str) -> None:
        if not self.is_note:
            error = InvalidOperationError(operation, self.type)
            logger.error("❌ %s rejected for %s: %s", operation, self.id, error)
            raise error

    def _pitch_input(self, operation: str, value: Any) -> PitchInput:
        try:
            return coerce_pitch_input(value)
        except InvalidArgumentsError as exc:
            logger.error("❌ %s rejected for %s: %s", operation, self.id, exc)
            raise

    def _apply_pitch(self, pitch: int) -> None:
        note = self._resolver.from_pitch(pitch)
        self.data1 = pitch
        self.note = note
        self.note_name = note.full_name
        self.note_number = note.number
        self.octave = note.octave
        self.frequency = note.frequency
        if self.midi_note is not None:
            self.midi_note.pitch = pitch

    def _advance(self, target: LifecycleState) -> None:
        self.state = advance(self.state, target)

    def _resolve_position(self, position: tuple[object, ...]) -> Optional[ResolvedPosition]:
        result = self.song.get_position(position)  # type: ignore[union-attr]
        if result is None or result is False:
            logger.error("❌ wrong position data for %s: %r", self.id, position)
            return None
        try:
            return ResolvedPosition.model_validate(result)
        except ValueError as exc:
            logger.error("❌ wrong position data for %s: %r (%s)", self.id, position, exc)
            return None

    def __repr__(self) -> str:
        type_repr = "None" if self.type is None else f"0x{self.type:02X}"
        return (
            f"<MIDIEvent {self.id} ticks={self.ticks} type={type_repr} "
            f"channel={self.channel} data=({self.data1}, {self.data2}) state={self.state.value}>"
        )


def create_midi_event(*args: Any, **kwargs: Any) -> MIDIEvent:
    """Create a :class:`MIDIEvent` from variadic or wrapped arguments."""
    return MIDIEvent(*args, **kwargs)

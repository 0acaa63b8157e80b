"""Bridge between ``mido`` message objects and :class:`MIDIEvent`.

``MIDIEvent`` itself only decodes raw numeric fields; messages that were
already parsed by ``mido`` (from a file or a live port) come through here.

Supported meta messages: ``set_tempo``, ``time_signature``, ``end_of_track``.
Channel-voice and system messages are decoded from their raw bytes.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Union

import mido

from midievent.contracts.midi_types import EventType
from midievent.core.errors import InvalidArgumentsError, InvalidOperationError
from midievent.core.event import MIDIEvent

logger = logging.getLogger(__name__)

AnyMessage = Union[mido.Message, mido.MetaMessage]

# Fields an event must carry before it can be encoded, per type.
_REQUIRED_FIELDS: dict[int, tuple[str, ...]] = {
    EventType.NOTE_ON: ("data1",),
    EventType.NOTE_OFF: ("data1",),
    EventType.CONTROL_CHANGE: ("data1",),
    EventType.PROGRAM_CHANGE: ("data1",),
    EventType.CHANNEL_PRESSURE: ("data1",),
    EventType.TEMPO: ("bpm",),
    EventType.TIME_SIGNATURE: ("nominator", "denominator"),
}


def midi_event_from_message(
    message: AnyMessage,
    ticks: Optional[int] = None,
    **kwargs: Any,
) -> MIDIEvent:
    """Decode a ``mido`` message into a :class:`MIDIEvent`.

    Args:
        message: A ``mido.Message`` or ``mido.MetaMessage``.
        ticks: Absolute tick position.  Defaults to ``message.time``, which
            is the delta time when the message comes straight from a track.
        **kwargs: Passed to ``MIDIEvent`` (``counter``, ``resolver``).

    Raises:
        InvalidArgumentsError: For meta messages the event model has no
            type code for.
    """
    if ticks is None:
        ticks = int(message.time)

    if isinstance(message, mido.MetaMessage):
        if message.type == "set_tempo":
            return MIDIEvent(ticks, int(EventType.TEMPO), mido.tempo2bpm(message.tempo), **kwargs)
        if message.type == "time_signature":
            return MIDIEvent(
                ticks, int(EventType.TIME_SIGNATURE), message.numerator, message.denominator, **kwargs
            )
        if message.type == "end_of_track":
            return MIDIEvent(ticks, int(EventType.END_OF_TRACK), **kwargs)
        raise InvalidArgumentsError(f"Unsupported meta message type {message.type!r}")

    raw = message.bytes()[:3]
    logger.debug("Decoding %s at tick %d from bytes %s", message.type, ticks, raw)
    return MIDIEvent(ticks, *raw, **kwargs)


def midi_event_to_message(event: MIDIEvent) -> AnyMessage:
    """Encode ``event`` as a ``mido`` message with ``time`` set to its ticks.

    Note-off events (including reclassified zero-velocity note-ons) become
    ``note_off`` messages.  A detached event (channel 0) is sent on the
    first channel.

    Raises:
        InvalidOperationError: When the event type has no ``mido`` equivalent,
            or the event lacks a field its message needs (e.g. a tempo event
            without ``bpm``).
    """
    _require_fields(event)
    time = event.ticks or 0
    channel = max((event.channel or 1) - 1, 0)

    if event.type == EventType.NOTE_ON:
        return mido.Message(
            "note_on", note=int(event.data1), velocity=int(event.velocity or 0),
            channel=channel, time=time,
        )
    if event.type == EventType.NOTE_OFF:
        return mido.Message("note_off", note=int(event.data1), velocity=0, channel=channel, time=time)
    if event.type == EventType.CONTROL_CHANGE:
        return mido.Message(
            "control_change", control=int(event.data1), value=int(event.data2 or 0),
            channel=channel, time=time,
        )
    if event.type == EventType.PROGRAM_CHANGE:
        return mido.Message("program_change", program=int(event.data1), channel=channel, time=time)
    if event.type == EventType.CHANNEL_PRESSURE:
        return mido.Message("aftertouch", value=int(event.data1), channel=channel, time=time)
    if event.type == EventType.PITCH_BEND:
        # 14-bit value from LSB (data1) and MSB (data2), centred on 0
        value = (int(event.data2 or 0) << 7 | int(event.data1 or 0)) - 8192
        return mido.Message("pitchwheel", pitch=value, channel=channel, time=time)
    if event.type == EventType.TEMPO:
        return mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(event.bpm), time=time)
    if event.type == EventType.TIME_SIGNATURE:
        return mido.MetaMessage(
            "time_signature",
            numerator=int(event.nominator),
            denominator=int(event.denominator),
            time=time,
        )
    if event.type == EventType.END_OF_TRACK:
        return mido.MetaMessage("end_of_track", time=time)
    raise InvalidOperationError("midi_event_to_message", event.type, reason="has no mido equivalent")


def _require_fields(event: MIDIEvent) -> None:
    for name in _REQUIRED_FIELDS.get(event.type, ()):  # type: ignore[arg-type]
        if getattr(event, name) is None:
            error = InvalidOperationError(
                "midi_event_to_message", event.type, reason=f"is missing {name}"
            )
            logger.error("❌ cannot encode %s: %s", event.id, error)
            raise error
    if event.type == EventType.TEMPO and event.bpm <= 0:
        error = InvalidOperationError(
            "midi_event_to_message", event.type, reason="needs a positive bpm"
        )
        logger.error("❌ cannot encode %s: %s", event.id, error)
        raise error

"""Container ports — the only song/part/playback interfaces the event model uses.

Songs, tracks and parts own their events and set the back-references on
``MIDIEvent``; the event never constructs them.  Any object with the right
shape satisfies these protocols.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from midievent.contracts.midi_types import Ticks


class ResolvedPosition(BaseModel):
    """Position returned by ``Song.get_position``; only ``ticks`` is read."""

    model_config = ConfigDict(extra="allow", from_attributes=True)

    ticks: Ticks


@runtime_checkable
class Song(Protocol):
    """Port for resolving musical positions into ticks."""

    def get_position(self, position: tuple[object, ...]) -> object:
        """Resolve a tagged position such as ``("barsbeats", 4, 1, 1, 0)``.

        Returns a ``ResolvedPosition`` (or anything exposing ``ticks``), or
        ``None``/``False`` when the position cannot be resolved.
        """
        ...


@runtime_checkable
class Part(Protocol):
    """Port for the part that must re-flush after an event changes."""

    def mark_needs_update(self) -> None:
        ...


@runtime_checkable
class PlaybackHandle(Protocol):
    """Live note handle whose pitch follows transpose/set_pitch."""

    pitch: int

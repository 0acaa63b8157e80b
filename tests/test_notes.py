"""Tests for pitch → note name, octave and frequency."""
from __future__ import annotations

import pytest

from midievent import InvalidArgumentsError, MIDIEvent, NoteResolver
from midievent.core.notes import get_note_resolver


class TestFromPitch:
    """NoteResolver.from_pitch."""

    @pytest.mark.parametrize(
        "pitch,full_name,octave",
        [(0, "C-1", -1), (21, "A0", 0), (60, "C4", 4), (61, "C#4", 4), (127, "G9", 9)],
    )
    def test_names_and_octaves(self, resolver: NoteResolver, pitch: int, full_name: str, octave: int) -> None:

        note = resolver.from_pitch(pitch)
        assert note.full_name == full_name
        assert note.octave == octave
        assert note.number == pitch

    def test_a4_is_reference(self, resolver: NoteResolver) -> None:

        assert resolver.from_pitch(69).frequency == pytest.approx(440.0)

    def test_octave_doubles_frequency(self, resolver: NoteResolver) -> None:

        low = resolver.from_pitch(57).frequency
        high = resolver.from_pitch(69).frequency
        assert high == pytest.approx(low * 2)

    def test_flat_spelling(self) -> None:

        note = NoteResolver(note_name_mode="flat").from_pitch(70)
        assert note.name == "Bb"
        assert note.full_name == "Bb4"

    def test_custom_reference(self) -> None:

        assert NoteResolver(reference_hz=432.0).from_pitch(69).frequency == pytest.approx(432.0)

    @pytest.mark.parametrize("pitch", [-1, 128, 60.0, "60", True])
    def test_rejects_invalid_pitch(self, resolver: NoteResolver, pitch: object) -> None:

        with pytest.raises(InvalidArgumentsError):
            resolver.from_pitch(pitch)  # type: ignore[arg-type]

    def test_rejects_non_positive_reference(self) -> None:

        with pytest.raises(InvalidArgumentsError):
            NoteResolver(reference_hz=0)


class TestDefaultResolver:
    """Process-wide resolver built from settings."""

    def test_follows_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:

        monkeypatch.setenv("MIDIEVENT_NOTE_NAME_MODE", "flat")
        monkeypatch.setenv("MIDIEVENT_PITCH_REFERENCE_HZ", "442")
        resolver = get_note_resolver()
        assert resolver.note_name_mode == "flat"
        assert resolver.from_pitch(69).frequency == pytest.approx(442.0)

    def test_is_cached(self) -> None:

        assert get_note_resolver() is get_note_resolver()

    def test_event_uses_injected_resolver(self) -> None:

        event = MIDIEvent(0, 0x90, 63, 100, resolver=NoteResolver(note_name_mode="flat"))
        assert event.note_name == "Eb4"
        event.transpose(3)
        assert event.note_name == "Gb4"

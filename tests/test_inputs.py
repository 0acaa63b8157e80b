"""Tests for boundary coercion of constructor and mutation arguments."""
from __future__ import annotations

import pytest

from midievent import Hertz, InvalidArgumentsError, MusicalPosition, Semitones, TickPosition
from midievent.core.inputs import EventFields, coerce_pitch_input, coerce_position, unwrap_args


class TestEventFields:
    """EventFields.from_args."""

    def test_optional_fields_default_to_none(self) -> None:

        fields = EventFields.from_args((0, 0x2F))
        assert fields.data1 is None
        assert fields.data2 is None
        assert fields.channel is None

    def test_status_and_channel_truncated(self) -> None:

        fields = EventFields.from_args((1.5, 144.0, 60, 100, 2.7))
        assert fields.ticks == 1
        assert fields.status == 144
        assert fields.channel == 2

    def test_data_bytes_keep_their_type(self) -> None:

        fields = EventFields.from_args((0, 0x51, 92.5))
        assert fields.data1 == 92.5

    @pytest.mark.parametrize(
        "args",
        [(), (0,), (0, -1), (0, 256), (0, float("inf")), (0, 0x51, 120, None, 17), (0, 0x51, 120, None, -1)],
    )
    def test_rejected(self, args: tuple[object, ...]) -> None:

        with pytest.raises(InvalidArgumentsError):
            EventFields.from_args(args)

    def test_channel_range_bounds_accepted(self) -> None:

        assert EventFields.from_args((0, 0x51, 120, None, 0)).channel == 0
        assert EventFields.from_args((0, 0x51, 120, None, 16.9)).channel == 16


class TestUnwrapArgs:
    """At most one extra level of list nesting is removed."""

    def test_flat(self) -> None:

        assert unwrap_args((1, 2)) == (1, 2)

    def test_single_wrap(self) -> None:

        assert unwrap_args(([1, 2],)) == [1, 2]

    def test_double_wrap(self) -> None:

        assert unwrap_args(([[1, 2]],)) == [1, 2]

    def test_strings_are_not_unwrapped(self) -> None:

        assert unwrap_args(("ab",)) == ("ab",)


class TestCoercePitchInput:
    """Pitch amounts resolve to Semitones or Hertz."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (3, Semitones(3)),
            (-3.9, Semitones(-3)),
            (("semi", 4), Semitones(4)),
            (["semitone", -2], Semitones(-2)),
            (("hertz", 440), Hertz(440.0)),
            (Semitones(1), Semitones(1)),
            (Hertz(1.5), Hertz(1.5)),
        ],
    )
    def test_accepted(self, value: object, expected: object) -> None:

        assert coerce_pitch_input(value) == expected

    @pytest.mark.parametrize("value", ["3", None, False, ("octave", 1), ("semi",), ("semi", None)])
    def test_rejected(self, value: object) -> None:

        with pytest.raises(InvalidArgumentsError):
            coerce_pitch_input(value)


class TestCoercePosition:
    """move_to arguments resolve to TickPosition or MusicalPosition."""

    def test_flat_ticks(self) -> None:

        assert coerce_position("ticks", 240) == TickPosition(240)

    def test_wrapped_ticks(self) -> None:

        assert coerce_position(["ticks", 240.5]) == TickPosition(240)

    def test_typed_positions_pass_through(self) -> None:

        position = MusicalPosition(("millis", 10))
        assert coerce_position(position) is position
        assert coerce_position(TickPosition(3)) == TickPosition(3)

    def test_other_tags_are_musical(self) -> None:

        assert coerce_position("barsbeats", 1, 1, 1, 0) == MusicalPosition(("barsbeats", 1, 1, 1, 0))

    def test_non_numeric_ticks_are_musical(self) -> None:

        assert coerce_position("ticks", "x") == MusicalPosition(("ticks", "x"))

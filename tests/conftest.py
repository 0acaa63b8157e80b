"""Pytest configuration and fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from midievent.config import get_settings
from midievent.core.identity import EventCounter, use_counter
from midievent.core.notes import NoteResolver, reset_note_resolver
from midievent.core.ports import ResolvedPosition


@pytest.fixture(autouse=True)
def counter():
    """Route every event created in a test through a fresh default-prefixed counter."""
    with use_counter(EventCounter(prefix="M")) as fresh:
        yield fresh


@pytest.fixture(autouse=True)
def _reset_cached_config():
    """Drop cached settings and resolver so env overrides don't leak between tests."""
    get_settings.cache_clear()
    reset_note_resolver()
    yield
    get_settings.cache_clear()
    reset_note_resolver()


@pytest.fixture
def resolver() -> NoteResolver:
    return NoteResolver()


@dataclass
class FakePart:
    """Part that records re-flush requests."""

    updates: int = 0

    def mark_needs_update(self) -> None:
        self.updates += 1


@dataclass
class FakeSong:
    """Song that resolves positions from a lookup table."""

    positions: dict[tuple[object, ...], object] = field(default_factory=dict)
    requests: list[tuple[object, ...]] = field(default_factory=list)

    def get_position(self, position: tuple[object, ...]) -> object:
        self.requests.append(position)
        return self.positions.get(position, False)


@dataclass
class FakePlaybackHandle:
    pitch: int = 0


@pytest.fixture
def part() -> FakePart:
    return FakePart()


@pytest.fixture
def song() -> FakeSong:
    return FakeSong(positions={("barsbeats", 2, 1, 1, 0): ResolvedPosition(ticks=1920)})


@pytest.fixture
def handle() -> FakePlaybackHandle:
    return FakePlaybackHandle(pitch=60)

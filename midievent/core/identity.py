"""Process-wide identity source for MIDI events.

Every event takes exactly one ``(id, event_number)`` pair at construction.
The default counter starts at zero and is monotonic for the life of the
process; tests swap it with :func:`use_counter` for deterministic ids.

Ids are unique across counters as long as prefixes are: the process-wide
counter owns ``"M"``, and a counter built without a prefix is given its own
(``"M1."``, ``"M2."``, …).  An explicit prefix is the caller's to keep
distinct.
"""
from __future__ import annotations

import itertools
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

DEFAULT_PREFIX = "M"

# Serial for counters built without an explicit prefix.
_anonymous_serial = itertools.count(1)


class EventCounter:
    """Thread-safe monotonic counter that hands out event identities.

    ``next_identity()`` returns ``(f"{prefix}{n}", n + 1)`` where ``n`` is the
    pre-increment value, so the first event of ``EventCounter(prefix="M")``
    is ``("M0", 1)``.
    """

    def __init__(self, start: int = 0, prefix: Optional[str] = None) -> None:
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        if prefix is None:
            prefix = f"{DEFAULT_PREFIX}{next(_anonymous_serial)}."
        self._value = start
        self._prefix = prefix
        self._lock = threading.Lock()

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def value(self) -> int:
        """Number of identities handed out so far (plus ``start``)."""
        return self._value

    def next_identity(self) -> tuple[str, int]:
        with self._lock:
            n = self._value
            self._value += 1
        return f"{self._prefix}{n}", n + 1


_counter: EventCounter = EventCounter(prefix=DEFAULT_PREFIX)


def get_event_counter() -> EventCounter:
    """Get the process-wide counter."""
    return _counter


@contextmanager
def use_counter(counter: EventCounter) -> Iterator[EventCounter]:
    """Temporarily route default identity generation through ``counter``."""
    global _counter
    previous = _counter
    _counter = counter
    try:
        yield counter
    finally:
        _counter = previous

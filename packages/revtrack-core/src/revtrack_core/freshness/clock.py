"""Clock sources in the same time domain as file modification times."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


def systime() -> float:
    """Current wall-clock time in seconds since the epoch.

    File systems stamp ``st_mtime`` from the wall clock, so a monotonic clock
    would not be comparable with it.
    """
    return time.time()


@runtime_checkable
class ClockSource(Protocol):
    """Anything that can report the current time as epoch seconds."""

    def now(self) -> float: ...


class SystemClock:
    """ClockSource backed by systime()."""

    def now(self) -> float:
        return systime()

    def __repr__(self) -> str:
        return "SystemClock()"


class ManualClock:
    """ClockSource that only moves when told to. Used for replay and tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float) -> None:
        self._now = float(value)

    def advance(self, seconds: float) -> float:
        self._now += seconds
        return self._now

    def __repr__(self) -> str:
        return f"ManualClock({self._now!r})"


SYSTEM_CLOCK = SystemClock()

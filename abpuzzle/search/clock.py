from __future__ import annotations
import time


class Clock:
    """Pacing hook for the search. sleep() is the only suspension point the engine uses."""

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class NullClock(Clock):
    """Zero-delay clock: the search runs at full speed. Counts requested pauses."""

    def __init__(self):
        self.calls = 0
        self.requested = 0.0

    def sleep(self, seconds: float) -> None:
        self.calls += 1
        self.requested += seconds

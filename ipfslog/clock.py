"""Lamport clocks ordering log entries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LamportClock:
    """A logical clock: an identifier and a counter."""

    id: bytes = b""
    time: int = 0

    @property
    def defined(self) -> bool:
        """True when the clock carries an identifier."""
        return len(self.id) > 0

    def tick(self) -> "LamportClock":
        """Advance the clock and return a copy of its new state."""
        self.time += 1
        return LamportClock(self.id, self.time)

    def merge(self, clock: "LamportClock") -> "LamportClock":
        """Take the greater of both times and return a copy of the new state."""
        self.time = max(self.time, clock.time)
        return LamportClock(self.id, self.time)

    def compare(self, other: "LamportClock") -> int:
        """Return the time distance, or the identifier ordering on equal times."""
        dist = self.time - other.time
        if dist == 0:
            a, b = bytes(self.id), bytes(other.id)
            return (a > b) - (a < b)
        return dist


def copy_lamport_clock(clock: LamportClock) -> LamportClock:
    """Return an independent copy of ``clock``."""
    return LamportClock(clock.id, clock.time)
"""Monotonic frame clock producing per-tick deltas."""

from __future__ import annotations

from collections.abc import Callable
from time import monotonic


class FrameClock:
    """Monotonic clock with bounded, non-negative frame deltas.

    The first call to next() returns 0.0; later calls return the seconds since
    the previous call, clamped to ``[0, max_delta]`` so a stalled process does
    not complete every timer at once when it wakes up.
    """

    def __init__(
        self,
        *,
        time_source: Callable[[], float] | None = None,
        max_delta: float = 0.25,
    ) -> None:
        self._time_source = time_source or monotonic
        self._max_delta = max_delta
        self._last: float | None = None
        self._elapsed = 0.0

    @property
    def elapsed(self) -> float:
        """Sum of all deltas returned so far."""
        return self._elapsed

    def next(self) -> float:
        """Advance the clock and return the delta for this frame."""
        now = self._time_source()
        if self._last is None:
            delta = 0.0
        else:
            delta = min(max(0.0, now - self._last), self._max_delta)
        self._last = now
        self._elapsed += delta
        return delta

    def reset(self) -> None:
        """Forget the previous reading so the next delta is 0.0."""
        self._last = None

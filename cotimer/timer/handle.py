"""Timer handles: per-timer progress state and the advance step.

A handle represents one countdown started through a TimerScheduler. Callers
only ever see it through the read-only :class:`TimerView` protocol; the
mutating methods (``_advance`` and ``_cancel``) are reserved for the
scheduler's driving coroutine.

Timer Lifecycle:
    1. Creation: TimerScheduler.start_timer() builds the handle
    2. Advancement: the scheduler's coroutine calls _advance(dt) once per tick
    3. Completion: elapsed >= duration fires the callback exactly once
    4. Cancellation: TimerScheduler.stop_timer() drops the callback unfired

A handle never re-activates once it has completed or been cancelled.

Example:
    >>> handle = scheduler.start_timer(2.0, lambda: print("done"))
    >>> scheduler.tick(1.0)
    >>> handle.completed_percentage
    0.5
    >>> scheduler.tick(1.0)
    done
    >>> handle.is_completed, handle.is_active
    (True, False)
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import count
from typing import Protocol, runtime_checkable

TimerCallback = Callable[[], object]

_next_timer_id = count(1)


@runtime_checkable
class TimerView(Protocol):
    """Read-only view of a running or finished timer."""

    @property
    def id(self) -> int:
        """Process-wide unique identifier of the timer."""
        ...

    @property
    def name(self) -> str | None:
        """Optional label given when the timer was started."""
        ...

    @property
    def duration(self) -> float:
        """Total seconds of the timer."""
        ...

    @property
    def elapsed_time(self) -> float:
        """Elapsed seconds."""
        ...

    @property
    def remaining_time(self) -> float:
        """Remaining seconds."""
        ...

    @property
    def is_completed(self) -> bool:
        """Whether the timer ran to completion."""
        ...

    @property
    def is_active(self) -> bool:
        """Whether the timer is still being advanced."""
        ...

    @property
    def completed_percentage(self) -> float:
        """Completion from 0.0 to 1.0."""
        ...


class TimerHandle:
    """Progress state and identity of a single countdown.

    Handles are created by TimerScheduler and advanced only by the coroutine
    the scheduler runs for them. All public attributes are read-only
    properties.

    Attributes:
        _duration (float): Total seconds, never negative.
        _elapsed (float): Seconds accumulated so far; never decreases.
        _remaining (float): ``duration - elapsed`` clamped to ``[0, duration]``,
                            refreshed on every advance.
        _fraction (float): ``elapsed / duration`` while running, 1.0 once completed.
        _callback (TimerCallback | None): Completion callback, cleared after it
                                          runs or when the timer is cancelled.
    """

    __slots__ = (
        "_id",
        "_name",
        "_duration",
        "_elapsed",
        "_remaining",
        "_fraction",
        "_completed",
        "_active",
        "_callback",
    )

    def __init__(
        self, duration: float, callback: TimerCallback | None, name: str | None = None
    ) -> None:
        """Initialize an active, unstarted timer.

        Args:
            duration (float): Countdown length in seconds. The sign is
                              discarded, so -3.0 and 3.0 give the same timer.
            callback (TimerCallback | None): Called once when the countdown
                                             completes. May be None.
            name (str | None): Optional label for logs and monitoring.
        """
        self._id = next(_next_timer_id)
        self._name = name
        self._duration = abs(float(duration))
        self._elapsed = 0.0
        self._remaining = 0.0
        self._fraction = 0.0
        self._completed = False
        self._active = True
        self._callback = callback

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def elapsed_time(self) -> float:
        return self._elapsed

    @property
    def remaining_time(self) -> float:
        return self._remaining

    @property
    def is_completed(self) -> bool:
        return self._completed

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def completed_percentage(self) -> float:
        return self._fraction

    def _advance(self, dt: float) -> bool:
        """Advance the countdown by one tick.

        Completion is checked after the whole delta has been added, so a timer
        fires at the end of the tick in which its deadline falls (late by at
        most one tick, never early). The callback runs synchronously here.

        Args:
            dt (float): Seconds elapsed since the previous tick. Negative
                        values count as zero.

        Returns:
            bool: True if the timer is finished (just completed, or was
                  already inactive), False if it keeps running.
        """
        if not self._active or self._completed:
            self._cancel()
            return True

        self._elapsed += max(float(dt), 0.0)
        self._remaining = min(max(self._duration - self._elapsed, 0.0), self._duration)

        if self._elapsed >= self._duration:
            self._completed = True
            self._fraction = 1.0
            callback = self._callback
            try:
                if callback is not None:
                    callback()
            finally:
                self._cancel()
            return True

        self._fraction = self._elapsed / self._duration
        return False

    def _cancel(self) -> None:
        """Deactivate the timer and drop its callback without calling it."""
        self._active = False
        self._callback = None

    def __repr__(self) -> str:
        if self._completed:
            state = "completed"
        elif self._active:
            state = "active"
        else:
            state = "cancelled"
        label = f" {self._name!r}" if self._name else ""
        return (
            f"<TimerHandle #{self._id}{label} {state} "
            f"{self._elapsed:g}/{self._duration:g}s ({self._fraction:.0%})>"
        )

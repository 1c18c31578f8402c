"""Cooperative timer scheduler.

TimerScheduler owns every live timer handle and advances them from a single
``tick(dt)`` entry point. Whatever drives the program (a TickLoop thread, a
game loop, a StepDriver in tests) calls ``tick`` once per time step with the
seconds elapsed since the previous step.

Architecture:
    Each handle is driven by its own generator coroutine that waits for the
    next tick, advances the handle and finishes once the handle reports it is
    done. The registry maps handle ids to (handle, coroutine) entries. A
    finished coroutine unregisters its handle itself; stop_timer and
    stop_all_timers close coroutines and unregister from the outside.

    Tick Flow:
        1. Snapshot the registry
        2. Send dt to each coroutine still registered
        3. Coroutines whose handle finished unregister and stop
        4. Callback failures are logged (and optionally re-raised)

Threading Model:
    The registry is guarded by a re-entrant lock, so timers may be started or
    stopped from other threads while a TickLoop drives ``tick``, and callbacks
    may start or stop timers from inside a tick. Firing order of timers that
    complete within the same tick is unspecified.

Example:
    >>> scheduler = TimerScheduler()
    >>> handle = scheduler.start_timer(2.0, lambda: print("boom"))
    >>> scheduler.tick(1.0)
    0
    >>> scheduler.tick(1.0)
    boom
    1
    >>> handle in scheduler
    False
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
import math
import threading

import numpy as np

from cotimer.config import SchedulerConfig
from cotimer.errors import CallbackError, InvalidArgumentError, UnsupportedOperationError
from cotimer.log import get_logger
from cotimer.unit import Seconds, to_seconds

from .handle import TimerCallback, TimerHandle, TimerView

logger = get_logger(__name__)

TimerCoroutine = Generator[None, float, None]
StartListener = Callable[[TimerView], None]


@dataclass
class _TimerEntry:
    handle: TimerHandle
    coroutine: TimerCoroutine


def _close(coroutine: TimerCoroutine) -> None:
    # A callback stopping its own timer runs inside that timer's coroutine,
    # which then finishes by itself because the handle is inactive.
    if not coroutine.gi_running:
        coroutine.close()


class TimerScheduler:
    """Starts, advances and cancels countdown timers.

    Attributes:
        config (SchedulerConfig): Random seed and callback error policy.
        _timers (dict[int, _TimerEntry]): Registry of live timers keyed by
                                          handle id.
        _lock (threading.RLock): Guards the registry.
        _rng (np.random.Generator): Source for start_random_timer durations.
        _total_ticks (int): Number of ticks processed so far.
        _elapsed (float): Sum of all deltas passed to tick.
        _ticking (bool): Set while a tick is running.
        _start_listeners (list[StartListener]): Called with every new handle.
    """

    _timers: dict[int, _TimerEntry]

    def __init__(self, config: SchedulerConfig | None = None):
        self.config = config or SchedulerConfig()
        self._timers = {}
        self._lock = threading.RLock()
        self._rng = np.random.default_rng(self.config.seed)
        self._total_ticks = 0
        self._elapsed = 0.0
        self._ticking = False
        self._start_listeners: list[StartListener] = []

    # -------------------------------- Public API --------------------------------
    def start_timer(
        self,
        seconds: Seconds,
        callback: TimerCallback | None = None,
        name: str | None = None,
    ) -> TimerView:
        """Starts a timer and returns its handle.

        The handle is live as soon as this returns and is first advanced on
        the next tick.

        Args:
            seconds (Seconds): Length of the timer. The sign is discarded.
            callback (TimerCallback | None): Called once when the timer
                                             completes successfully.
            name (str | None): Optional label for logs and monitoring.

        Returns:
            TimerView: Read-only handle of the timer.
        """
        handle = TimerHandle(abs(to_seconds(seconds)), callback, name)
        coroutine = self._timer_coroutine(handle)
        next(coroutine)
        with self._lock:
            self._timers[handle.id] = _TimerEntry(handle, coroutine)
            listeners = list(self._start_listeners)
        logger.debug("Started %r", handle)

        for listener in listeners:
            try:
                listener(handle)
            except Exception:
                logger.exception("Start listener %r failed for %r", listener, handle)
        return handle

    def start_random_timer(
        self,
        min_seconds: Seconds,
        max_seconds: Seconds,
        callback: TimerCallback | None = None,
        name: str | None = None,
    ) -> TimerView:
        """Starts a timer with a random duration in ``[min_seconds, max_seconds)``.

        Args:
            min_seconds (Seconds): Inclusive lower bound, greater than 0.
            max_seconds (Seconds): Exclusive upper bound, greater than min_seconds.
            callback (TimerCallback | None): Called once when the timer
                                             completes successfully.
            name (str | None): Optional label for logs and monitoring.

        Returns:
            TimerView: Read-only handle of the timer.

        Raises:
            InvalidArgumentError: If min_seconds >= max_seconds, either bound
                                  is not greater than 0, or either bound is
                                  NaN or infinite.
        """
        low = to_seconds(min_seconds)
        high = to_seconds(max_seconds)
        if not (math.isfinite(low) and math.isfinite(high)):
            raise InvalidArgumentError(
                f"bounds of the random timer have to be finite, got [{low}, {high})"
            )
        if low >= high:
            raise InvalidArgumentError(
                "min_seconds of the random timer can't be greater or equal to max_seconds"
            )
        if low <= 0 or high <= 0:
            raise InvalidArgumentError(
                "min_seconds and max_seconds of the random timer have to be greater than 0"
            )

        with self._lock:
            seconds = float(self._rng.uniform(low, high))
        if seconds >= high:
            # uniform() may round up to the open bound
            seconds = float(np.nextafter(high, low))
        return self.start_timer(seconds, callback, name)

    def stop_timer(self, handle: TimerView) -> bool:
        """Stops the timer of the given handle.

        The callback of a stopped timer never fires.

        Args:
            handle (TimerView): Handle returned by this scheduler.

        Returns:
            bool: True if the timer was tracked by this scheduler and has been
                  stopped, False for finished, foreign or unknown handles.
        """
        if not isinstance(handle, TimerHandle):
            return False

        with self._lock:
            entry = self._timers.get(handle.id)
            if entry is None or entry.handle is not handle:
                return False
            del self._timers[handle.id]

        handle._cancel()
        _close(entry.coroutine)
        logger.debug("Stopped %r", handle)
        return True

    def stop_all_timers(self) -> None:
        """Cancels all the timers and empties the registry."""
        with self._lock:
            entries = list(self._timers.values())
            self._timers.clear()

        for entry in entries:
            entry.handle._cancel()
            _close(entry.coroutine)
        if entries:
            logger.debug("Stopped all %d timers", len(entries))

    def stop_all_coroutines(self) -> None:
        """Not supported: timer coroutines can only be cancelled with stop_all_timers.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not allow coroutine modification, use stop_all_timers()"
        )

    def tick(self, dt: Seconds) -> int:
        """Advance every live timer by ``dt`` seconds.

        Timers whose deadline falls within this tick complete and fire their
        callback during this call. Timers started during the tick (e.g. from a
        callback) are advanced from the next tick on.

        Args:
            dt (Seconds): Seconds elapsed since the previous tick.

        Returns:
            int: Number of timers that completed during this tick.

        Raises:
            CallbackError: If a callback raised and ``config.raise_callback_errors``
                           is set. Raised after all timers were advanced.
            UnsupportedOperationError: If called from inside a callback of
                                       the tick that is already running.
        """
        dt = to_seconds(dt)
        completed = 0
        errors: list[CallbackError] = []

        with self._lock:
            if self._ticking:
                raise UnsupportedOperationError(f"{type(self).__name__}.tick() is not re-entrant")
            self._ticking = True
            self._total_ticks += 1
            self._elapsed += max(dt, 0.0)

            try:
                for timer_id, entry in list(self._timers.items()):
                    if self._timers.get(timer_id) is not entry:
                        continue  # stopped by an earlier callback in this tick
                    try:
                        entry.coroutine.send(dt)
                    except StopIteration:
                        self._discard(timer_id, entry)
                        if entry.handle.is_completed:
                            completed += 1
                    except Exception as e:
                        self._discard(timer_id, entry)
                        completed += 1
                        logger.exception("Callback of %r failed", entry.handle)
                        errors.append(CallbackError(entry.handle.id, entry.handle.name, e))
                    except BaseException:
                        # the coroutine is dead, don't keep its handle around
                        self._discard(timer_id, entry)
                        raise
            finally:
                self._ticking = False

        if errors and self.config.raise_callback_errors:
            raise errors[0] from errors[0].error
        return completed

    # -------------------------------- Listeners --------------------------------
    def register_start_listener(self, listener: StartListener) -> None:
        """Register a function called with every handle started from now on.

        Listeners run on the thread that started the timer, after the handle
        is registered. Exceptions raised by a listener are logged.
        """
        with self._lock:
            self._start_listeners.append(listener)

    def unregister_start_listener(self, listener: StartListener) -> bool:
        """Remove a start listener.

        Returns:
            bool: True if the listener was registered.
        """
        with self._lock:
            if listener in self._start_listeners:
                self._start_listeners.remove(listener)
                return True
            return False

    # -------------------------------- Queries --------------------------------
    @property
    def active_timers(self) -> tuple[TimerView, ...]:
        """Handles currently tracked by the scheduler, oldest first."""
        with self._lock:
            return tuple(entry.handle for entry in self._timers.values())

    @property
    def total_ticks(self) -> int:
        return self._total_ticks

    @property
    def elapsed_time(self) -> float:
        """Seconds the scheduler has been ticked for in total."""
        return self._elapsed

    def is_tracking(self, handle: TimerView) -> bool:
        """Check if ``handle`` is a live timer of this scheduler."""
        if not isinstance(handle, TimerHandle):
            return False
        with self._lock:
            entry = self._timers.get(handle.id)
            return entry is not None and entry.handle is handle

    def __contains__(self, handle: object) -> bool:
        return self.is_tracking(handle)

    def __len__(self) -> int:
        with self._lock:
            return len(self._timers)

    # -------------------------------- Lifetime --------------------------------
    def close(self) -> None:
        """Tear the scheduler down, cancelling every timer."""
        self.stop_all_timers()

    def __enter__(self) -> TimerScheduler:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------- Internals --------------------------------
    def _timer_coroutine(self, handle: TimerHandle) -> TimerCoroutine:
        while True:
            dt = yield
            if handle._advance(dt):
                break

        self._discard(handle.id, None)
        if handle.is_completed:
            logger.debug("Completed %r", handle)

    def _discard(self, timer_id: int, entry: _TimerEntry | None) -> None:
        with self._lock:
            current = self._timers.get(timer_id)
            if current is not None and (entry is None or current is entry):
                del self._timers[timer_id]

"""Background thread that ticks a scheduler in real time.

TickLoop is the real-time tick source for applications without their own
frame loop. It measures the time between iterations with a FrameClock and
feeds it (scaled by ``time_scale``) to ``TimerScheduler.tick``.

Threading Architecture:
    - Caller threads: start/stop timers, pause/resume/stop the loop
    - Loop thread: the only thread calling scheduler.tick()

Events:
    loop_started, loop_stopped, loop_paused, loop_resumed: lifecycle
    tick_error: scheduler.tick raised (data carries the exception)

Example:
    >>> scheduler = TimerScheduler()
    >>> with TickLoop(scheduler, TickLoopConfig(update_interval=0.02)):
    ...     scheduler.start_timer(1.5, lambda: print("ready"))
    ...     time.sleep(2)
    ready
"""

from __future__ import annotations

from collections.abc import Callable
import threading
import time
from typing import Any

from cotimer.config import TickLoopConfig
from cotimer.log import get_logger
from cotimer.timer import TimerScheduler

from .clock import FrameClock

logger = get_logger(__name__)

EventHandler = Callable[[str, dict[str, Any]], None]


class TickLoop:
    """Drives a TimerScheduler from a dedicated thread.

    Stopping the loop detaches it from the scheduler: by default every timer
    still running is cancelled, since nothing will advance it any more.
    """

    def __init__(
        self,
        scheduler: TimerScheduler,
        config: TickLoopConfig | None = None,
        clock: FrameClock | None = None,
    ):
        """Initialize the tick loop.

        Args:
            scheduler: Scheduler to tick.
            config: Loop configuration. Uses defaults if None.
            clock: Source of frame deltas. Defaults to a monotonic FrameClock
                   bounded by ``config.max_delta``.
        """
        self.scheduler = scheduler
        self.config = config or TickLoopConfig()
        self.clock = clock or FrameClock(max_delta=self.config.max_delta)

        self.running = False
        self.paused = False
        self.ticks = 0

        self.event_handlers: dict[str, list[EventHandler]] = {}

        self._thread: threading.Thread | None = None
        self._pause_event = threading.Event()
        self._shutdown_event = threading.Event()

    def start(self) -> None:
        """Start ticking in a separate thread. Does nothing if already running."""
        if self.running:
            return

        self.running = True
        self._shutdown_event.clear()
        self._pause_event.set()
        self.clock.reset()

        self._thread = threading.Thread(
            target=self._loop, name=self.config.thread_name, daemon=True
        )
        self._thread.start()
        self.emit_event("loop_started", {"timestamp": time.time(), "config": self.config})

    def stop(self, detach: bool = True) -> None:
        """Stop the loop and wait for the thread to finish.

        Args:
            detach: Cancel every timer left in the scheduler.
        """
        if not self.running:
            return

        self.running = False
        self._shutdown_event.set()
        self._pause_event.set()

        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=self.config.join_timeout)
        self._thread = None

        if detach:
            self.scheduler.stop_all_timers()

        self.emit_event("loop_stopped", {"timestamp": time.time(), "ticks": self.ticks})

    def pause(self) -> None:
        """Stop advancing timers until resume() is called.

        Time spent paused does not count towards any timer.
        """
        self.paused = True
        self._pause_event.clear()
        self.emit_event("loop_paused", {"timestamp": time.time()})

    def resume(self) -> None:
        self.paused = False
        self._pause_event.set()
        self.emit_event("loop_resumed", {"timestamp": time.time()})

    def __enter__(self) -> TickLoop:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _loop(self) -> None:
        self.clock.next()

        while not self._shutdown_event.is_set():
            if not self._pause_event.is_set():
                self._pause_event.wait()
                self.clock.reset()
                self.clock.next()
                continue

            if self._shutdown_event.wait(self.config.update_interval):
                break
            if not self._pause_event.is_set():
                continue

            dt = self.clock.next() * self.config.time_scale
            try:
                self.scheduler.tick(dt)
            except Exception as e:
                logger.exception("Tick %d failed", self.ticks)
                self.emit_event("tick_error", {"error": e, "tick": self.ticks, "timestamp": time.time()})
            self.ticks += 1

    # Event System
    def register_event_handler(self, event_name: str, handler: EventHandler) -> None:
        """Register a handler called as ``handler(event_name, data)``."""
        self.event_handlers.setdefault(event_name, []).append(handler)

    def emit_event(self, event_name: str, data: dict[str, Any]) -> None:
        for handler in self.event_handlers.get(event_name, []):
            try:
                handler(event_name, data)
            except Exception:
                logger.exception("Error in event handler for %s", event_name)

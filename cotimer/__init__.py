"""cotimer: cooperative countdown timers driven by an external tick.

cotimer lets an application start independently cancellable countdown timers
that each call a completion callback exactly once, and exposes live progress
(elapsed and remaining time, completion fraction) while they run. Nothing runs
on its own: the application, a TickLoop thread or a StepDriver calls
``TimerScheduler.tick(dt)`` once per time step and all timers advance by the
same ``dt``.

Package Layout:
    cotimer.timer: TimerScheduler, TimerView and TimerHandle
    cotimer.driver: FrameClock, TickLoop (real time), StepDriver (simulated time)
    cotimer.monitor: rich live view and pandas/matplotlib timeline analysis
    cotimer.unit: Second, Minute, Hour and ClockTime
    cotimer.config: SchedulerConfig and TickLoopConfig
    cotimer.errors: TimerError hierarchy
    cotimer.log: get_logger and configure_logging

Timer Lifecycle:
    1. start_timer / start_random_timer return a read-only TimerView
    2. Every tick advances the timer by dt
    3. When elapsed >= duration the callback fires once and the timer is dropped
    4. stop_timer / stop_all_timers cancel without firing the callback

Quick Start:
    >>> from cotimer import TimerScheduler, StepDriver, Second
    >>> scheduler = TimerScheduler()
    >>> handle = scheduler.start_timer(Second(2), lambda: print("done"))
    >>> StepDriver(scheduler, step=Second(0.5)).run_for(Second(2))
    done
    1
    >>> handle.is_completed
    True
"""

from cotimer.config import SchedulerConfig, TickLoopConfig
from cotimer.driver import FrameClock, StepDriver, TickLoop
from cotimer.errors import (
    CallbackError,
    InvalidArgumentError,
    TimerError,
    UnsupportedOperationError,
)
from cotimer.log import configure_logging, get_logger
from cotimer.timer import (
    TimerScheduler,
    TimerView,
    get_default_scheduler,
    reset_default_scheduler,
)
from cotimer.unit import ClockTime, Hour, Minute, Second, Time

__all__ = [
    "TimerScheduler",
    "TimerView",
    "get_default_scheduler",
    "reset_default_scheduler",
    "FrameClock",
    "StepDriver",
    "TickLoop",
    "SchedulerConfig",
    "TickLoopConfig",
    "TimerError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "CallbackError",
    "configure_logging",
    "get_logger",
    "Second",
    "Minute",
    "Hour",
    "ClockTime",
    "Time",
]

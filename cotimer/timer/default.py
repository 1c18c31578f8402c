"""Process-wide default scheduler.

Applications that only need one scheduler can share it through
get_default_scheduler(). It is created on first use and torn down (all timers
cancelled) by reset_default_scheduler().
"""

import threading

from cotimer.config import SchedulerConfig

from .scheduler import TimerScheduler

_default: TimerScheduler | None = None
_default_lock = threading.Lock()


def get_default_scheduler(config: SchedulerConfig | None = None) -> TimerScheduler:
    """Return the shared scheduler, creating it on first use.

    Args:
        config: Used only when the scheduler is created by this call.
    """
    global _default
    with _default_lock:
        if _default is None:
            _default = TimerScheduler(config)
        return _default


def reset_default_scheduler() -> None:
    """Cancel every timer of the shared scheduler and forget it."""
    global _default
    with _default_lock:
        scheduler, _default = _default, None
    if scheduler is not None:
        scheduler.close()

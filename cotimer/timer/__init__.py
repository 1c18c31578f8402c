"""Timer handles and the cooperative scheduler that drives them.

Components:
    TimerView: Read-only protocol exposed to callers for a started timer
    TimerHandle: Concrete handle, advanced only by its scheduler
    TimerScheduler: Registry and per-tick driver of all live timers
    get_default_scheduler / reset_default_scheduler: Shared instance helpers

Example:
    >>> from cotimer.timer import TimerScheduler
    >>> scheduler = TimerScheduler()
    >>> respawn = scheduler.start_random_timer(3.0, 5.0, spawn_enemy, name="respawn")
    >>> while game_running:
    ...     scheduler.tick(frame_dt)
"""

from .default import get_default_scheduler, reset_default_scheduler
from .handle import TimerCallback, TimerHandle, TimerView
from .scheduler import TimerScheduler

__all__ = [
    "TimerCallback",
    "TimerHandle",
    "TimerView",
    "TimerScheduler",
    "get_default_scheduler",
    "reset_default_scheduler",
]

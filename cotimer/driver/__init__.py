"""Tick sources for TimerScheduler.

The scheduler never reads a clock itself; one of these drivers (or the host
application's own frame loop) calls ``scheduler.tick(dt)``.

Components:
    FrameClock: Monotonic, clamped per-frame deltas
    TickLoop: Real-time background thread
    StepDriver: Fixed-step simulated time for tests and offline runs
"""

from .clock import FrameClock
from .stepper import StepDriver
from .tick_loop import TickLoop

__all__ = ["FrameClock", "StepDriver", "TickLoop"]

"""Observing timers: live terminal view and recorded timelines.

Components:
    TimerMonitor: rich table/panel of active timers, optionally rendered live
    TimelineRecorder: per-tick samples as a pandas DataFrame, with per-timer summary
    plot_progress: matplotlib completion curves from a timeline frame
"""

from .live import TimerMonitor
from .timeline import COLUMNS, TimelineRecorder, plot_progress

__all__ = ["TimerMonitor", "TimelineRecorder", "plot_progress", "COLUMNS"]

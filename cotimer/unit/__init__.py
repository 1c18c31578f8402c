"""Time units for timer durations and tick deltas.

Durations and deltas can be written as plain seconds or with explicit units:

    >>> from cotimer.unit import Minute, Second
    >>> scheduler.start_timer(Minute(2), on_done)    # 120 s
    >>> scheduler.tick(Second(1 / 60))

Modules:
    - unit_base: Unit class with family management
    - unit_float: Float-based units with automatic SI conversion
    - unit_time: Second, Minute, Hour and ClockTime
"""

from .unit_base import Unit
from .unit_float import UnitFloat
from .unit_time import ClockTime, Hour, Minute, Second, Seconds, Time, to_seconds

__all__ = [
    "Unit",
    "UnitFloat",
    "Second",
    "Minute",
    "Hour",
    "ClockTime",
    "Time",
    "Seconds",
    "to_seconds",
]

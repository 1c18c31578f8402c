"""Time unit definitions.

All time units are based on Second (SI) and can be passed anywhere the timer
API expects seconds.

Classes:
    Second: Base time unit in seconds (SI unit).
    Minute: Time unit representing 60 seconds.
    Hour: Time unit representing 3600 seconds.
    ClockTime: Seconds rendered as ``HH:MM:SS.sss`` for display.

Type Aliases:
    Time: Union type for all time units.
    Seconds: Anything accepted as a duration (a time unit or a plain number).

Example:
    >>> float(Minute(2))
    120.0
    >>> str(ClockTime(3723.5))
    '01:02:03.500'
"""

from __future__ import annotations

from math import isfinite

from .unit_float import UnitFloat


class Second(UnitFloat):
    """Time unit: Second (SI base unit for time)."""

    IS_FAMILY_ROOT = True
    SCALE_TO_SI = 1.0
    SYMBOL = "s"


class Minute(Second):
    """Time unit: Minute (60 seconds)."""

    SCALE_TO_SI = 60.0
    SYMBOL = "min"


class Hour(Second):
    """Time unit: Hour (3600 seconds)."""

    SCALE_TO_SI = 3600.0
    SYMBOL = "h"


class ClockTime(Second):
    """Seconds displayed in a stopwatch format.

    Used by the monitor to render elapsed and remaining timer time.

    Example:
        >>> print(ClockTime(90.25))
        00:01:30.250
    """

    SCALE_TO_SI = 1.0

    @classmethod
    def from_str(cls, time_str: str) -> ClockTime:
        """Create a ClockTime from a ``"HH:MM:SS"`` formatted string."""
        h, m, s = map(float, time_str.split(":"))
        return cls(h * 3600 + m * 60 + s)

    def __str__(self) -> str:
        if not isfinite(float(self)):
            return "--:--:--"
        h, r = divmod(float(self), 3600)
        m, s = divmod(r, 60)
        return f"{int(h):02d}:{int(m):02d}:{s:06.3f}"


Time = Second | Minute | Hour | ClockTime
Seconds = Time | int | float


def to_seconds(value: Seconds) -> float:
    """Return ``value`` as a plain float number of seconds.

    Raises:
        TypeError: If ``value`` is a unit from a family other than time.
    """
    Second._check_same_root(type(value))
    return float(value)
